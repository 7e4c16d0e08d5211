"""Exception handlers turning errors into JSON responses"""

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Union

from app.core.exceptions import AuthError, LucentError, UpstreamError
from app.core.logging_config import get_logger


logger = get_logger(__name__)

HTTP_ERROR_TYPES = {
    401: "authentication_required",
    403: "not_owner",
    404: "not_found",
    405: "method_not_allowed",
}


async def lucent_exception_handler(
    request: Request,
    exc: LucentError
) -> JSONResponse:
    """
    Handle domain errors.

    The status code comes from the exception class: AuthError 401,
    OwnershipError 403, NotFoundError 404, ArticleNotGeneratedError 409,
    UpstreamError 502.
    """
    log = logger.error if isinstance(exc, UpstreamError) else logger.warning
    log(
        "domain_error_handled",
        request_path=request.url.path,
        request_method=request.method,
        error_type=type(exc).__name__,
        error_code=exc.error_code,
        context=exc.context,
        error_details=exc.details,
    )

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.get_api_response(),
        headers=headers
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """422 listing each rejected body or query field"""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        }
        for error in exc.errors()
    ]

    logger.warning(
        "validation_error_handled",
        request_path=request.url.path,
        request_method=request.method,
        errors=errors
    )

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "type": "validation_error",
            "errors": errors
        }
    )


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException]
) -> JSONResponse:
    """Framework HTTP errors (unknown route, wrong method) in the same body shape as domain errors"""
    logger.warning(
        "http_exception_handled",
        request_path=request.url.path,
        request_method=request.method,
        status_code=exc.status_code,
        detail=str(exc.detail)
    )

    content = {"detail": exc.detail, "type": HTTP_ERROR_TYPES.get(exc.status_code, "http_error")}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Anything else is a 500 with a fixed body; the details only go to the log"""
    logger.error(
        "unexpected_exception_handled",
        request_path=request.url.path,
        request_method=request.method,
        error_type=type(exc).__name__,
        error_message=str(exc),
        exc_info=exc
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "type": "internal_server_error"
        }
    )


def register_exception_handlers(app):
    """Install the handlers above on ``app``"""
    app.add_exception_handler(LucentError, lucent_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info(
        "exception_handlers_registered",
        handlers=[
            "LucentError",
            "RequestValidationError",
            "HTTPException",
            "StarletteHTTPException",
            "Exception"
        ]
    )
