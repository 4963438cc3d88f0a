"""Tests for CorrelationIdMiddleware"""
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.middlewares import CorrelationIdMiddleware
from src.utils.correlation_id import CORRELATION_ID_HEADER, get_correlation_id


def build_app():
    app = FastAPI()
    app.add_middleware(CorrelationIdMiddleware)

    @app.get("/trace")
    async def trace():
        return {"correlation_id": get_correlation_id()}

    return app


def test_handler_sees_incoming_id():
    response = TestClient(build_app()).get("/trace", headers={CORRELATION_ID_HEADER: "order-77"})

    assert response.json() == {"correlation_id": "order-77"}
    assert response.headers[CORRELATION_ID_HEADER] == "order-77"


def test_generated_id_is_echoed():
    response = TestClient(build_app()).get("/trace")

    generated = response.json()["correlation_id"]
    assert generated
    assert response.headers[CORRELATION_ID_HEADER] == generated
