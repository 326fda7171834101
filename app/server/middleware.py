from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging import CORRELATION_ID_HEADER, bind_request_context


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds a correlation id to the logs of each request and echoes it back."""

    async def dispatch(self, request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_ID_HEADER),
            request_path=request.url.path,
            request_method=request.method,
        ) as correlation_id:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
