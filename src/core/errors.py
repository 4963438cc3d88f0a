# Error handling utilities

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError, PyMongoError

from src.core.logger import logger


class ErrorResponse(Exception):
    code = "ERROR"

    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ErrorResponse):
    code = "NOT_FOUND"

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=404, details=details)


class InvalidCredentialsError(ErrorResponse):
    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid credentials", details: dict = None):
        super().__init__(message, status_code=401, details=details)


class InsufficientStockError(ErrorResponse):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=409, details=details)


class DataValidationError(ErrorResponse):
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)


class InvalidStatusTransitionError(ErrorResponse):
    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current_status: str, requested_status: str):
        super().__init__(
            f"Cannot change order status from {current_status} to {requested_status}",
            status_code=409,
            details={"from": current_status, "to": requested_status},
        )


class StoreUnavailableError(ErrorResponse):
    """Transient persistence failure; the same request may succeed later."""

    code = "STORE_UNAVAILABLE"

    def __init__(self, message: str = "Database connection error. Please try again later."):
        super().__init__(message, status_code=503, details={"transient": True})


def translate_store_error(exc: PyMongoError) -> ErrorResponse:
    """Map a driver error to the permanent or transient domain error."""
    if isinstance(exc, DuplicateKeyError):
        key = (exc.details or {}).get("keyValue") or {}
        field = next(iter(key), None)
        return DataValidationError(
            f"A record with this {field or 'value'} already exists",
            details={"field": field} if field else None,
        )
    return StoreUnavailableError()


def error_response_handler(request: Request, exc: ErrorResponse):
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"Error: {exc.message}",
        metadata={
            "event": "error_response",
            "code": exc.code,
            "status_code": exc.status_code,
            "path": request.url.path,
            **exc.details,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code, "details": exc.details},
    )


def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(
        f"HTTPException: {exc.detail}",
        metadata={"event": "http_exception", "status_code": exc.status_code},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "Request validation failed",
        metadata={"event": "validation_error", "errors": errors},
    )
    return JSONResponse(
        status_code=422,
        content={"error": "Validation error", "code": DataValidationError.code, "details": errors},
    )


class ErrorResponseModel(BaseModel):
    error: str
    code: str = ErrorResponse.code
    details: dict = None
