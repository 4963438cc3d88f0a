"""Service layer exports."""

from src.services.category_service import CategoryService
from src.services.order_service import OrderService
from src.services.product_service import ProductService
from src.services.review_service import ReviewService
from src.services.user_service import UserService

__all__ = [
    "CategoryService",
    "OrderService",
    "ProductService",
    "ReviewService",
    "UserService",
]
