"""Tests for health endpoints and request middleware"""
from unittest.mock import AsyncMock, patch

from src.utils.correlation_id import CORRELATION_ID_HEADER


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_readiness_reports_database(client):
    with patch("src.controllers.operational_controller.mongodb.ping", AsyncMock(return_value=False)):
        response = client.get("/health/ready")
    assert response.status_code == 503
    assert response.json()["checks"]["database"] == "disconnected"

    with patch("src.controllers.operational_controller.mongodb.ping", AsyncMock(return_value=True)):
        response = client.get("/health/ready")
    assert response.status_code == 200


def test_correlation_id_is_echoed(client):
    response = client.get("/health/live", headers={CORRELATION_ID_HEADER: "trace-42"})
    assert response.headers[CORRELATION_ID_HEADER] == "trace-42"


def test_invalid_token_is_unauthorized(client):
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
