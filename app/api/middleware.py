"""Request id, access log and last-resort error middleware"""

import time
import re
from typing import Callable
from uuid import uuid4
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.core.logging_config import get_logger


logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with a uuid4, kept on ``request.state`` and echoed as ``X-Request-ID``"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log: one entry when a request starts and one when it completes.

    The completion entry carries the status, elapsed milliseconds and the
    user id set by ``get_current_user``. OAuth codes, session tokens and
    Bearer values are masked before logging. Health checks are only logged
    when they fail or when ``LOG_HEALTH_CHECKS`` is set.
    """

    MASKS = [
        (re.compile(r'(code|token)=[^&\s]+', re.IGNORECASE), r'\1=[REDACTED]'),
        (re.compile(r'Bearer\s+[A-Za-z0-9\-._~+/]+=*', re.IGNORECASE), 'Bearer [REDACTED]'),
    ]

    QUIET_PATHS = frozenset({"/health", "/favicon.ico"})

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        log = logger.bind(
            request_id=getattr(request.state, "request_id", "unknown"),
            method=request.method,
            path=request.url.path,
        )
        verbose = (
            request.url.path not in self.QUIET_PATHS
            or settings.LOG_HEALTH_CHECKS
            or settings.DEBUG
        )
        started = time.perf_counter()

        def elapsed_ms() -> int:
            return int((time.perf_counter() - started) * 1000)

        if verbose:
            log.info(
                "request_started",
                query=self.mask(str(request.query_params)),
                client_host=request.client.host if request.client else None,
            )

        try:
            response = await call_next(request)
        except Exception as e:
            log.error(
                "request_failed",
                error_type=type(e).__name__,
                error_message=self.mask(str(e)),
                response_time_ms=elapsed_ms(),
                exc_info=True
            )
            raise

        if verbose or response.status_code >= 400:
            log.info(
                "request_completed",
                status_code=response.status_code,
                response_time_ms=elapsed_ms(),
                user_id=getattr(request.state, "user_id", None),
            )
        return response

    @classmethod
    def mask(cls, text: str) -> str:
        for pattern, replacement in cls.MASKS:
            text = pattern.sub(replacement, text)
        return text


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turns an exception that got past every handler into a JSON 500 with the request id"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            request_id = getattr(request.state, "request_id", "unknown")

            logger.error(
                "unhandled_exception",
                request_id=request_id,
                error_type=type(e).__name__,
                error_message=str(e),
                exc_info=True
            )

            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal server error",
                    "type": "internal_server_error",
                    "request_id": request_id,
                }
            )
