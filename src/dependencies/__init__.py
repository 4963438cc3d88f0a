"""
FastAPI dependency injection functions.

Dependency providers for authentication, repositories and services.
"""

from src.dependencies.auth import (
    CurrentUser,
    get_current_user,
    require_admin,
    require_role,
)
from src.dependencies.services import (
    get_category_repository,
    get_category_service,
    get_order_repository,
    get_order_service,
    get_product_repository,
    get_product_service,
    get_review_repository,
    get_review_service,
    get_user_repository,
    get_user_service,
)

__all__ = [
    "CurrentUser",
    "get_current_user",
    "require_admin",
    "require_role",
    "get_category_repository",
    "get_category_service",
    "get_order_repository",
    "get_order_service",
    "get_product_repository",
    "get_product_service",
    "get_review_repository",
    "get_review_service",
    "get_user_repository",
    "get_user_service",
]
