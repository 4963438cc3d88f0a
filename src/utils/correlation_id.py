"""
Correlation ID utilities for request tracing
"""

import uuid
from contextvars import ContextVar
from typing import Mapping, Optional

from src.config import config

CORRELATION_ID_HEADER = config.correlation_id_header

# Context variable to store correlation ID across async operations
correlation_id_context: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context

    Returns:
        str: Current correlation ID, or None outside of a request
    """
    return correlation_id_context.get("") or None


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_context.set(correlation_id)


def create_correlation_id() -> str:
    return str(uuid.uuid4())


def extract_correlation_id_from_headers(headers: Mapping[str, str]) -> str:
    """
    Extract correlation ID from request headers
    Generates new one if not present

    Args:
        headers: Request headers mapping

    Returns:
        str: Correlation ID from headers or newly generated
    """
    wanted = CORRELATION_ID_HEADER.lower()
    for name, value in headers.items():
        if name.lower() == wanted and value:
            return value

    return create_correlation_id()
