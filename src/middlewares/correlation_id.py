from starlette.middleware.base import BaseHTTPMiddleware

from src.utils.correlation_id import (
    CORRELATION_ID_HEADER,
    correlation_id_context,
    extract_correlation_id_from_headers,
)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Tag each storefront request with a correlation id.

    The incoming header wins when a gateway already assigned one. The id is
    only bound to the context while the request is being handled.
    """

    async def dispatch(self, request, call_next):
        correlation_id = extract_correlation_id_from_headers(request.headers)
        token = correlation_id_context.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_context.reset(token)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
