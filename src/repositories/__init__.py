"""
Repository layer for data access.

One repository per MongoDB collection; services never touch collections
directly.
"""

from src.repositories.base_repository import BaseRepository
from src.repositories.category_repository import CategoryRepository
from src.repositories.order_repository import OrderRepository
from src.repositories.product_repository import ProductRepository
from src.repositories.review_repository import ReviewRepository
from src.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "OrderRepository",
    "ProductRepository",
    "ReviewRepository",
    "UserRepository",
]
