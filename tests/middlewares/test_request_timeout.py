"""Tests for RequestTimeoutMiddleware"""
import asyncio
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.dependencies.auth import CurrentUser, get_current_user
from src.dependencies.services import get_order_service
from src.middlewares import RequestTimeoutMiddleware
from src.repositories.order_repository import OrderRepository
from src.routers import order_router
from src.services.order_service import OrderService


def test_slow_handler_is_cancelled():
    events = []
    app = FastAPI()
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=0.1)

    @app.get("/slow")
    async def slow():
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            events.append("cancelled")
            raise
        events.append("completed")
        return {"ok": True}

    response = TestClient(app).get("/slow")

    assert response.status_code == 504
    assert response.json()["code"] == "TIMEOUT"
    assert events == ["cancelled"]


def test_fast_handler_is_untouched():
    app = FastAPI()
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=5)

    @app.get("/fast")
    async def fast():
        return {"ok": True}

    response = TestClient(app).get("/fast")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


class TestTimedOutOrder:

    @pytest.fixture
    def slow_order_repository(self):
        inserted = []

        async def slow_create(document):
            await asyncio.sleep(5)
            inserted.append(document)
            return {**document, "_id": ObjectId()}

        repo = AsyncMock(spec=OrderRepository)
        repo.create.side_effect = slow_create
        repo.inserted = inserted
        return repo

    @pytest.fixture
    def app(self, product_store, slow_order_repository):
        service = OrderService(slow_order_repository, product_store)
        user = CurrentUser(user_id=str(ObjectId()), email="user@example.com", roles=["USER"])

        app = FastAPI()
        app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=0.1)
        app.include_router(order_router, prefix="/api/orders")
        app.dependency_overrides[get_order_service] = lambda: service
        app.dependency_overrides[get_current_user] = lambda: user
        return app

    def test_reserved_stock_is_released(self, app, product_store, slow_order_repository, shipping_address):
        first = product_store.add("Lamp", stock=5)
        second = product_store.add("Bulb", stock=3)
        body = {
            "items": [
                {"product_id": str(first["_id"]), "quantity": 2},
                {"product_id": str(second["_id"]), "quantity": 3},
            ],
            "shipping_address": shipping_address,
            "payment_method": "card",
        }

        response = TestClient(app).post("/api/orders", json=body)

        assert response.status_code == 504
        assert first["stock"] == 5
        assert second["stock"] == 3
        assert slow_order_repository.inserted == []
