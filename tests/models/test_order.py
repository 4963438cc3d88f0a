"""Tests for order models and the status lifecycle"""
import pytest
from pydantic import ValidationError

from src.models.order import (
    OrderCreate,
    OrderItemInput,
    OrderStatus,
    can_transition,
    statuses_leading_to,
)


class TestStatusLifecycle:

    @pytest.mark.parametrize("current,target", [
        (OrderStatus.PENDING, OrderStatus.PROCESSING),
        (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
        (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
        (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    ])
    def test_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize("current,target", [
        (OrderStatus.PENDING, OrderStatus.SHIPPED),
        (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
        (OrderStatus.CANCELLED, OrderStatus.PENDING),
        (OrderStatus.PENDING, OrderStatus.PENDING),
    ])
    def test_rejected(self, current, target):
        assert not can_transition(current, target)

    def test_cancellable_statuses(self):
        assert sorted(statuses_leading_to(OrderStatus.CANCELLED)) == ["PENDING", "PROCESSING", "SHIPPED"]


class TestOrderCreate:

    def test_requires_items(self, shipping_address):
        with pytest.raises(ValidationError):
            OrderCreate(items=[], shipping_address=shipping_address, payment_method="card")

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderItemInput(product_id="507f1f77bcf86cd799439011", quantity=0)

    def test_shipping_address_fields_required(self, shipping_address):
        del shipping_address["city"]
        with pytest.raises(ValidationError):
            OrderCreate(
                items=[{"product_id": "507f1f77bcf86cd799439011", "quantity": 1}],
                shipping_address=shipping_address,
                payment_method="card",
            )
