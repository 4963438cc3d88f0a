"""
Repository and service dependency injection for FastAPI.

Routes depend on services; services receive the repositories they need.
Tests replace any of these with `app.dependency_overrides`.
"""

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorCollection

from src.db.mongodb import (
    get_categories_collection,
    get_orders_collection,
    get_products_collection,
    get_reviews_collection,
    get_users_collection,
)
from src.repositories import (
    CategoryRepository,
    OrderRepository,
    ProductRepository,
    ReviewRepository,
    UserRepository,
)
from src.services import (
    CategoryService,
    OrderService,
    ProductService,
    ReviewService,
    UserService,
)


async def get_user_repository(
    collection: AsyncIOMotorCollection = Depends(get_users_collection),
) -> UserRepository:
    return UserRepository(collection)


async def get_category_repository(
    collection: AsyncIOMotorCollection = Depends(get_categories_collection),
) -> CategoryRepository:
    return CategoryRepository(collection)


async def get_product_repository(
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
) -> ProductRepository:
    return ProductRepository(collection)


async def get_order_repository(
    collection: AsyncIOMotorCollection = Depends(get_orders_collection),
) -> OrderRepository:
    return OrderRepository(collection)


async def get_review_repository(
    collection: AsyncIOMotorCollection = Depends(get_reviews_collection),
) -> ReviewRepository:
    return ReviewRepository(collection)


async def get_user_service(
    repo: UserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(repo)


async def get_category_service(
    repo: CategoryRepository = Depends(get_category_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
) -> CategoryService:
    return CategoryService(repo, product_repo)


async def get_product_service(
    repo: ProductRepository = Depends(get_product_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> ProductService:
    """
    FastAPI dependency to get a ProductService instance.

    Usage:
        @router.get("/products/{product_id}")
        async def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
            return await service.get_product(product_id)
    """
    return ProductService(repo, category_repo)


async def get_order_service(
    repo: OrderRepository = Depends(get_order_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
) -> OrderService:
    return OrderService(repo, product_repo)


async def get_review_service(
    repo: ReviewRepository = Depends(get_review_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
    order_repo: OrderRepository = Depends(get_order_repository),
) -> ReviewService:
    return ReviewService(repo, product_repo, order_repo)
