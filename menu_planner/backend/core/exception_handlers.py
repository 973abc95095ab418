"""
Exception Handlers.

Turn exceptions into the error envelope. Application errors answer with
the status carried by the exception class; request validation failures
answer 422 with one entry per offending field; anything else is logged
with its traceback and answers a generic 500.

Usage:
    from menu_planner.backend.core.exception_handlers import register_exception_handlers

    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from menu_planner.backend.core.exceptions import ApplicationError
from menu_planner.backend.core.logging import get_logger
from menu_planner.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

REQUEST_INVALID_CODE = "VAL_REQUEST_INVALID"
INTERNAL_ERROR_CODE = "SYS_INTERNAL_ERROR"


def _get_request_id(request: Request) -> str | None:
    """Request ID set by the middleware, else the raw X-Request-ID header."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _detailed_errors_enabled() -> bool:
    from menu_planner.backend.core.config import get_app_config

    try:
        return get_app_config().features.api_detailed_errors
    except (RuntimeError, FileNotFoundError, ValueError):
        return False


def _error_response(
    request: Request,
    status_code: int,
    error: ErrorDetail,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    envelope = ErrorResponse(
        error=error,
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json"),
        headers=headers,
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors to ``{"field": "body.name.ca", ...}`` entries."""
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """Answer with the exception's own status, code, message and details."""
    status_code = exc.status_code
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Server error" if status_code >= 500 else "Client error",
        extra={
            "code": exc.code,
            "message": exc.message,
            "status": status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )

    # Bearer challenge on every 401
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    error = ErrorDetail(code=exc.code, message=exc.message, details=exc.details or None)
    return _error_response(request, status_code, error, headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies, query strings and path parameters."""
    field_errors = _field_errors(exc)
    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "fields": [item["field"] for item in field_errors],
        },
    )

    error = ErrorDetail(
        code=REQUEST_INVALID_CODE,
        message="Request validation failed",
        details={"validation_errors": field_errors},
    )
    return _error_response(request, 422, error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort for unexpected exceptions.

    The message never reaches the client. The exception type is added
    only when the api_detailed_errors feature flag is on.
    """
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )

    error = ErrorDetail(code=INTERNAL_ERROR_CODE, message="An unexpected error occurred")
    if _detailed_errors_enabled():
        error.details = {"exception_type": type(exc).__name__}
    return _error_response(request, 500, error)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
