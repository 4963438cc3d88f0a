"""Tests for product models"""
import pytest
from pydantic import ValidationError

from src.models.product import ProductCreate, ProductFilter, ProductUpdate


def product(**overrides):
    data = {
        "name": "Lamp",
        "description": "Desk lamp",
        "price": 20.0,
        "category_id": "507f1f77bcf86cd799439011",
        "sku": "LAMP-1",
    }
    data.update(overrides)
    return ProductCreate(**data)


def test_defaults():
    created = product()
    assert created.stock == 0
    assert created.tags == []


@pytest.mark.parametrize("overrides", [
    {"price": 0},
    {"stock": -1},
    {"discount_price": 25.0},
    {"sku": ""},
])
def test_invalid_products(overrides):
    with pytest.raises(ValidationError):
        product(**overrides)


def test_filter_price_range():
    with pytest.raises(ValidationError):
        ProductFilter(min_price=50, max_price=10)
    assert ProductFilter(min_price=10, max_price=10).max_price == 10


def test_update_rejects_stock():
    with pytest.raises(ValidationError):
        ProductUpdate(stock=5)
    assert "stock" not in ProductUpdate.model_fields
