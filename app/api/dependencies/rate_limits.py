from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from infrastructure.models import ErrorResponse

limiter = Limiter(
    key_func=get_remote_address,
)


async def rate_limit_handler(_request: Request, exc: Exception):
    """Custom rate limit handler that returns a 429 status code and a custom error message."""
    if isinstance(exc, RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content=ErrorResponse(
                error="Rate limit exceeded", error_code="RATE_LIMITED"
            ).model_dump(),
        )


def setup_rate_limiter(app: FastAPI):
    """
    Setup rate limiting for the FastAPI application.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter():
    """
    Returns the limiter instance.
    """
    return limiter
