"""
Domain models package.

Pydantic models for request payloads (…Create / …Update) and API
responses (…DB) of every collection.
"""

from .category import CategoryCreate, CategoryDB, CategoryUpdate
from .common import Address, ShippingAddress, SortOrder
from .order import (
    OrderCreate,
    OrderDB,
    OrderItem,
    OrderItemInput,
    OrderStatus,
    OrderStatusUpdate,
    PaymentStatus,
)
from .product import (
    ProductCreate,
    ProductDB,
    ProductFilter,
    ProductRating,
    ProductSort,
    ProductSortField,
    ProductSpecifications,
    ProductUpdate,
)
from .review import ReviewCreate, ReviewDB, ReviewUpdate
from .user import LoginRequest, TokenResponse, UserDB, UserRegister, UserRole

__all__ = [
    "Address",
    "ShippingAddress",
    "SortOrder",
    "CategoryCreate",
    "CategoryDB",
    "CategoryUpdate",
    "OrderCreate",
    "OrderDB",
    "OrderItem",
    "OrderItemInput",
    "OrderStatus",
    "OrderStatusUpdate",
    "PaymentStatus",
    "ProductCreate",
    "ProductDB",
    "ProductFilter",
    "ProductRating",
    "ProductSort",
    "ProductSortField",
    "ProductSpecifications",
    "ProductUpdate",
    "ReviewCreate",
    "ReviewDB",
    "ReviewUpdate",
    "LoginRequest",
    "TokenResponse",
    "UserDB",
    "UserRegister",
    "UserRole",
]
