"""Shared test fixtures"""
import os

# Cheap bcrypt for tests; must be set before src.config is imported
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from src.repositories.category_repository import CategoryRepository
from src.repositories.order_repository import OrderRepository
from src.repositories.product_repository import ProductRepository
from src.repositories.review_repository import ReviewRepository
from src.repositories.user_repository import UserRepository


class InMemoryProductStore:
    """
    Product repository double holding products in a dict.

    Stock updates follow the same conditional semantics as the MongoDB
    queries: a decrement only applies while enough units are left.
    """

    def __init__(self):
        self.products = {}
        self.fail_decrement_for = set()

    def add(self, name="Widget", price=10.0, stock=5, discount_price=None):
        oid = ObjectId()
        self.products[oid] = {
            "_id": oid,
            "name": name,
            "description": f"{name} description",
            "price": price,
            "discount_price": discount_price,
            "category_id": ObjectId(),
            "stock": stock,
            "sku": f"SKU-{oid}",
            "rating": {"average": 0.0, "count": 0},
            "is_active": True,
        }
        return self.products[oid]

    async def find_by_id(self, product_id):
        return self.products.get(ObjectId(str(product_id)))

    async def decrement_stock(self, product_id, quantity):
        product = self.products.get(ObjectId(str(product_id)))
        if product is None or product["stock"] < quantity or product_id in self.fail_decrement_for:
            return None
        product["stock"] -= quantity
        return product

    async def increment_stock(self, product_id, quantity):
        product = self.products.get(ObjectId(str(product_id)))
        if product is None:
            return None
        product["stock"] += quantity
        return product

    async def set_rating(self, product_id, average, count):
        product = self.products.get(ObjectId(str(product_id)))
        if product is None:
            return False
        product["rating"] = {"average": average, "count": count}
        return True


@pytest.fixture
def product_store():
    return InMemoryProductStore()


@pytest.fixture
def mock_collection():
    """Mock MongoDB collection for testing"""
    collection = MagicMock()
    collection.name = "test_collection"
    collection.find_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.count_documents = AsyncMock()
    return collection


def _inserting(doc):
    return {**doc, "_id": ObjectId()}


@pytest.fixture
def mock_order_repository():
    repo = AsyncMock(spec=OrderRepository)
    repo.create.side_effect = _inserting
    return repo


@pytest.fixture
def mock_product_repository():
    return AsyncMock(spec=ProductRepository)


@pytest.fixture
def mock_category_repository():
    return AsyncMock(spec=CategoryRepository)


@pytest.fixture
def mock_review_repository():
    repo = AsyncMock(spec=ReviewRepository)
    repo.create.side_effect = _inserting
    return repo


@pytest.fixture
def mock_user_repository():
    repo = AsyncMock(spec=UserRepository)
    repo.create.side_effect = _inserting
    return repo


@pytest.fixture
def shipping_address():
    return {
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "USA",
    }


@pytest.fixture
def user_id():
    return str(ObjectId())


@pytest.fixture
def now():
    return datetime.now(timezone.utc)
