"""
Exception Handlers.

Turn application errors, request validation failures and anything
unexpected into ErrorResponse envelopes with a matching status code.

Usage:
    app = FastAPI()
    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stickyboard.backend.core.exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from stickyboard.backend.core.logging import get_logger
from stickyboard.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    ConflictError: 409,
    ExternalServiceError: 502,
    DatabaseError: 503,
}


def _status_for(exc: ApplicationError) -> int:
    """Resolve the HTTP status for an exception, honouring subclasses."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return 500


def _get_request_id(request: Request) -> str | None:
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _request_context(request: Request) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": _get_request_id(request),
    }


def _error_response(request: Request, status_code: int, error: ErrorDetail) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """Map an ApplicationError to its status; 5xx logs as error, 4xx as warning."""
    status_code = _status_for(exc)
    context = _request_context(request)
    context.update(code=exc.code, message=exc.message, status=status_code)

    if status_code >= 500:
        logger.error("Server error", extra=context)
    else:
        logger.warning("Client error", extra=context)

    error = ErrorDetail(code=exc.code, message=exc.message)
    if isinstance(exc, ValidationError) and exc.details:
        error.details = exc.details
    return _error_response(request, status_code, error)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Report malformed request bodies as 422 VAL_REQUEST_INVALID.

    Each pydantic error becomes one entry in ``details.validation_errors``
    with a dotted field path such as ``body.position.x``.
    """
    errors = exc.errors()
    context = _request_context(request)
    logger.warning("Request validation failed", extra={**context, "error_count": len(errors)})

    error = ErrorDetail(
        code="VAL_REQUEST_INVALID",
        message="Request validation failed",
        details={
            "validation_errors": [
                {
                    "field": ".".join(str(loc) for loc in err.get("loc", [])),
                    "message": err.get("msg", "Validation error"),
                    "type": err.get("type", "unknown"),
                }
                for err in errors
            ]
        },
    )
    return _error_response(request, 422, error)


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Log the traceback and answer with a generic 500."""
    context = _request_context(request)
    logger.exception(
        "Unhandled exception",
        extra={**context, "exception_type": type(exc).__name__},
    )
    error = ErrorDetail(code="SYS_INTERNAL_ERROR", message="An unexpected error occurred")
    return _error_response(request, 500, error)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.debug("Exception handlers registered")
