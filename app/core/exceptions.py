"""Custom exceptions for the Lucent backend"""

from typing import Optional, Dict, Any
from datetime import datetime


class LucentError(Exception):
    """
    Base class for domain errors.

    Each subclass carries the HTTP status it is surfaced with; the mapping
    lives in app.api.exception_handlers.
    """

    status_code: int = 500
    default_error_code: str = "lucent_error"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional context about where the error occurred
            details: Additional error details for debugging
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.context = context
        self.details = details or {}
        self.timestamp = datetime.utcnow()

        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "details": self.details,
            "timestamp": self.timestamp.isoformat()
        }

    def get_api_response(self) -> Dict[str, Any]:
        """
        Get API-friendly error response.

        Returns:
            Dictionary suitable for HTTP error responses
        """
        return {
            "detail": self.message,
            "type": self.error_code,
            "timestamp": self.timestamp.isoformat()
        }


class AuthError(LucentError):
    """
    Raised when authentication fails.

    This exception is raised when:
    - The OAuth code exchange fails or yields no access token
    - GitHub rejects the access token when fetching the identity
    - A session token is missing, invalid, expired, or names an unknown user
    """

    status_code = 401
    default_error_code = "authentication_failed"


class OwnershipError(LucentError):
    """Raised when a resource exists but belongs to another user."""

    status_code = 403
    default_error_code = "not_owner"

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        user_id: Optional[str] = None,
        context: Optional[str] = None
    ):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            message=message,
            context=context,
            details={"resource": resource, "resource_id": resource_id}
        )


class NotFoundError(LucentError):
    """Raised when a requested resource does not exist."""

    status_code = 404
    default_error_code = "not_found"

    def __init__(self, resource: str, resource_id: str, context: Optional[str] = None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            message=f"{resource} with ID {resource_id} not found",
            context=context,
            details={"resource": resource, "resource_id": resource_id}
        )


class ArticleNotGeneratedError(LucentError):
    """Raised when an article edit is attempted before the first generation."""

    status_code = 409
    default_error_code = "article_not_generated"

    def __init__(self, commit_id: str, context: Optional[str] = None):
        self.commit_id = commit_id
        super().__init__(
            message="No article has been generated for this commit yet",
            context=context,
            details={"commit_id": commit_id}
        )


class UpstreamError(LucentError):
    """
    Raised when a GitHub API call fails.

    Carries the upstream status code when the provider answered at all.
    """

    status_code = 502
    default_error_code = "upstream_failure"

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        context: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.upstream_status = upstream_status
        merged = {"upstream_status": upstream_status}
        merged.update(details or {})
        super().__init__(message=message, context=context, details=merged)
