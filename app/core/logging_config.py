"""structlog setup shared by every module"""

import logging
import sys
from typing import Any
import structlog
from structlog.types import EventDict, Processor
from app.core.config import settings


SENSITIVE_KEYS = {
    'password', 'token', 'secret', 'authorization', 'api_key',
    'access_token', 'jwt', 'bearer', 'client_secret',
    'gemini_api_key', 'github_client_secret', 'diff', 'article_content'
}


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp every entry with the service name, version and environment"""
    event_dict["app"] = "lucent"
    event_dict["version"] = settings.APP_VERSION
    event_dict["environment"] = settings.ENVIRONMENT
    return event_dict


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: "***REDACTED***" if any(s in str(key).lower() for s in SENSITIVE_KEYS) else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_redact(item) for item in value]
    return value


def censor_sensitive_data(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Redact OAuth tokens, session tokens, secrets and raw diff or article
    bodies, at any depth of the entry.
    """
    return _redact(event_dict)


def configure_structlog() -> None:
    """
    Route structlog through the stdlib root logger at ``LOG_LEVEL``.

    Console output in development or with ``LOG_FORMAT=text``, one JSON
    object per line otherwise.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        censor_sensitive_data,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # Human-readable output for local development, JSON everywhere else
    if settings.DEBUG or settings.ENVIRONMENT == "development" or settings.LOG_FORMAT == "text":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("repositories_fetched", user_id=user.id, count=len(repos))
    """
    return structlog.get_logger(name)


configure_structlog()


__all__ = [
    'configure_structlog',
    'get_logger',
]
