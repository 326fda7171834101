"""Request-scoped logging context.

The HTTP middleware binds a correlation id for each request so every log line
emitted while dispatching a notification can be tied back to the call that
triggered it.
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator

import structlog

CORRELATION_ID_HEADER = "X-Correlation-ID"


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind request metadata to every log entry emitted inside the block.

    Args:
        correlation_id: Incoming request id. A uuid4 is generated when missing.
        request_path: HTTP request path.
        request_method: HTTP method.
        **extra_context: Additional key/value pairs to bind.

    Yields:
        The correlation id in effect.

    Example:
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_ID_HEADER),
            request_path=request.url.path,
        ) as correlation_id:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if request_path is not None:
        context["request_path"] = request_path

    if request_method is not None:
        context["request_method"] = request_method

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Return the correlation id bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get("correlation_id")
