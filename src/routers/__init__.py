# Router modules for the storefront service
from .category_router import router as category_router
from .order_router import router as order_router
from .product_router import router as product_router
from .review_router import router as review_router
from .user_router import router as user_router

__all__ = [
    "category_router",
    "order_router",
    "product_router",
    "review_router",
    "user_router",
]
