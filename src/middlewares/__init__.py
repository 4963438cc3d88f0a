from .correlation_id import CorrelationIdMiddleware
from .request_timeout import RequestTimeoutMiddleware

__all__ = ["CorrelationIdMiddleware", "RequestTimeoutMiddleware"]
