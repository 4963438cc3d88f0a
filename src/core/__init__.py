"""
Core utilities package.

Centralized core components for the storefront service:
- logger: Structured logging with correlation IDs
- errors: Custom exception classes and handlers
- auth: Password hashing and access tokens
- indexes: MongoDB index setup
"""

# Errors
from .errors import (
    DataValidationError,
    ErrorResponse,
    ErrorResponseModel,
    InsufficientStockError,
    InvalidCredentialsError,
    InvalidStatusTransitionError,
    NotFoundError,
    StoreUnavailableError,
    error_response_handler,
    http_exception_handler,
    validation_exception_handler,
)

# Logger
from .logger import logger

__all__ = [
    # Errors
    "DataValidationError",
    "ErrorResponse",
    "ErrorResponseModel",
    "InsufficientStockError",
    "InvalidCredentialsError",
    "InvalidStatusTransitionError",
    "NotFoundError",
    "StoreUnavailableError",
    "error_response_handler",
    "http_exception_handler",
    "validation_exception_handler",
    # Logger
    "logger",
]
