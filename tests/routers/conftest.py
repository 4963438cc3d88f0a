"""Fixtures for router tests: the app with services and identity overridden"""
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from bson import ObjectId

from src.dependencies.auth import CurrentUser, get_current_user
from src.dependencies.services import (
    get_category_service,
    get_order_service,
    get_product_service,
    get_review_service,
    get_user_service,
)
from src.main import app
from src.services import (
    CategoryService,
    OrderService,
    ProductService,
    ReviewService,
    UserService,
)


def _provide(value):
    return lambda: value


@pytest.fixture
def services():
    mocks = {
        get_user_service: AsyncMock(spec=UserService),
        get_category_service: AsyncMock(spec=CategoryService),
        get_product_service: AsyncMock(spec=ProductService),
        get_order_service: AsyncMock(spec=OrderService),
        get_review_service: AsyncMock(spec=ReviewService),
    }
    for dependency, mock in mocks.items():
        app.dependency_overrides[dependency] = _provide(mock)
    yield mocks
    app.dependency_overrides.clear()


@pytest.fixture
def current_user():
    return CurrentUser(user_id=str(ObjectId()), email="user@example.com", roles=["USER"])


@pytest.fixture
def admin_user():
    return CurrentUser(user_id=str(ObjectId()), email="admin@example.com", roles=["ADMIN"])


@pytest.fixture
def login_as():
    def _login(user):
        app.dependency_overrides[get_current_user] = lambda: user
    return _login


@pytest.fixture
def client(services):
    return TestClient(app)
