"""JSON error responses for domain, HTTP and validation errors."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from infrastructure.logging import get_module_logger
from infrastructure.models import ErrorResponse
from infrastructure.notifications import NotificationError

logger = get_module_logger()


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def notification_error_handler(request: Request, exc: NotificationError):
    """Domain errors carry their own HTTP status and error code."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_failed",
        path=request.url.path,
        status_code=exc.status_code,
        error_code=exc.error_code,
        error=exc.message,
    )
    return _error_response(
        exc.status_code,
        ErrorResponse(error=exc.message, error_code=exc.error_code, details=exc.details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(
        exc.status_code,
        ErrorResponse(error=str(exc.detail), error_code=f"HTTP_{exc.status_code}"),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies answer 400 like the other validation failures."""
    fields = [".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()]
    logger.warning("request_validation_failed", path=request.url.path, fields=fields)
    return _error_response(
        400,
        ErrorResponse(
            error=f"Invalid request fields: {', '.join(fields) or 'body'}",
            error_code="VALIDATION_ERROR",
            details={"fields": fields},
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return _error_response(
        500, ErrorResponse(error=str(exc) or "Internal Server Error", error_code="INTERNAL_ERROR")
    )


def setup_exception_handlers(app: FastAPI):
    """
    Register the JSON error handlers on the FastAPI application.
    """
    app.add_exception_handler(NotificationError, notification_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
