"""
Order service layer - the order placement and cancellation workflow.

Placing an order reserves stock item by item with an atomic conditional
decrement and snapshots each item's effective price. If any later step fails
(an unknown product, a short item, a lost race, the order insert itself),
every reservation already made is released before the error propagates.

Status changes follow ORDER_STATUS_TRANSITIONS and are written with a
compare-and-swap on the current status; cancellation restores stock exactly
once.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId

from src.core.errors import (
    ErrorResponse,
    InsufficientStockError,
    InvalidStatusTransitionError,
    DataValidationError,
    NotFoundError,
)
from src.core.logger import logger
from src.models.common import doc_to_model
from src.models.order import (
    OrderCreate,
    OrderDB,
    OrderStatus,
    PaymentStatus,
    can_transition,
    statuses_leading_to,
)
from src.repositories.order_repository import OrderRepository
from src.repositories.product_repository import ProductRepository
from src.utils.validators import validate_object_id


def effective_price(product: Dict[str, Any]) -> float:
    """Discount price when set, list price otherwise."""
    return product.get("discount_price") or product["price"]


class OrderService:

    def __init__(self, repository: OrderRepository, product_repository: ProductRepository):
        self.repository = repository
        self.product_repository = product_repository

    @staticmethod
    def _check_owner(order: Dict[str, Any], owner_id: Optional[str]):
        if owner_id is not None and str(order["user_id"]) != owner_id:
            raise ErrorResponse("You can only access your own orders.", status_code=403)

    async def _load(self, order_id: str) -> Dict[str, Any]:
        order = await self.repository.find_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found", details={"order_id": order_id})
        return order

    async def _release_stock(self, reserved: List[Tuple[ObjectId, int]], reason: str):
        """Undo stock reservations, newest first."""
        for product_oid, quantity in reversed(reserved):
            try:
                restored = await self.product_repository.increment_stock(product_oid, quantity)
            except ErrorResponse as e:
                logger.critical(
                    "Stock compensation failed; stock must be corrected manually",
                    error=e,
                    metadata={
                        "event": "stock_compensation_failed",
                        "product_id": str(product_oid),
                        "quantity": quantity,
                    },
                )
                continue

            logger.warning(
                f"Released {quantity} units of product {product_oid}",
                metadata={
                    "event": "stock_compensated",
                    "product_id": str(product_oid),
                    "quantity": quantity,
                    "reason": reason,
                    "product_exists": restored is not None,
                },
            )

    async def create_order(self, user_id: str, data: OrderCreate) -> OrderDB:
        """
        Place an order on behalf of `user_id`.

        Items are processed in request order: look up the product, check its
        stock, snapshot the effective price, then reserve the quantity.

        Raises:
            NotFoundError: A product does not exist
            InsufficientStockError: A product has fewer units than requested,
                checked before the reservation and enforced by it
        """
        user_oid = validate_object_id(user_id, field="user_id")
        items: List[Dict[str, Any]] = []
        reserved: List[Tuple[ObjectId, int]] = []
        total_amount = 0.0

        try:
            for item in data.items:
                product = await self.product_repository.find_by_id(item.product_id)
                if not product:
                    raise NotFoundError(
                        f"Product not found: {item.product_id}",
                        details={"product_id": item.product_id},
                    )

                stock_details = {
                    "product_id": item.product_id,
                    "requested": item.quantity,
                    "available": product.get("stock", 0),
                }
                if product.get("stock", 0) < item.quantity:
                    raise InsufficientStockError(
                        f"Insufficient stock for {product['name']}", details=stock_details
                    )

                price = effective_price(product)
                total_amount += price * item.quantity
                items.append(
                    {"product_id": product["_id"], "quantity": item.quantity, "price": price}
                )

                # Another order may have taken the units since the read above
                if await self.product_repository.decrement_stock(product["_id"], item.quantity) is None:
                    raise InsufficientStockError(
                        f"Insufficient stock for {product['name']}", details=stock_details
                    )
                reserved.append((product["_id"], item.quantity))

            now = datetime.now(timezone.utc)
            order = await self.repository.create(
                {
                    "user_id": user_oid,
                    "items": items,
                    "total_amount": total_amount,
                    "status": OrderStatus.PENDING.value,
                    "payment_status": PaymentStatus.PENDING.value,
                    "shipping_address": data.shipping_address.model_dump(),
                    "payment_method": data.payment_method,
                    "tracking_number": None,
                    "notes": data.notes,
                    "created_at": now,
                    "updated_at": now,
                }
            )
        except (ErrorResponse, asyncio.CancelledError) as e:
            if reserved:
                await self._release_stock(reserved, reason=type(e).__name__)
            raise

        logger.info(
            f"Created order {order['_id']}",
            user_id=user_id,
            metadata={
                "event": "order_created",
                "order_id": str(order["_id"]),
                "item_count": len(items),
                "total_amount": total_amount,
            },
        )
        return doc_to_model(OrderDB, order)

    async def cancel_order(self, order_id: str, owner_id: Optional[str] = None) -> OrderDB:
        """
        Cancel an order and put its items back into stock.

        Args:
            order_id: Order to cancel
            owner_id: When given, the order must belong to this user

        Raises:
            NotFoundError: The order does not exist
            InvalidStatusTransitionError: The order is already DELIVERED or CANCELLED
        """
        order = await self._load(order_id)
        self._check_owner(order, owner_id)

        cancelled = await self.repository.transition_status(
            order["_id"], statuses_leading_to(OrderStatus.CANCELLED), OrderStatus.CANCELLED
        )
        if cancelled is None:
            latest = await self.repository.find_by_id(order["_id"]) or order
            raise InvalidStatusTransitionError(latest["status"], OrderStatus.CANCELLED.value)

        for item in cancelled["items"]:
            restored = await self.product_repository.increment_stock(item["product_id"], item["quantity"])
            if restored is None:
                logger.warning(
                    "Product no longer exists; stock not restored",
                    metadata={
                        "event": "cancel_restore_skipped",
                        "order_id": order_id,
                        "product_id": str(item["product_id"]),
                    },
                )

        logger.info(
            f"Cancelled order {order_id}",
            metadata={
                "event": "order_cancelled",
                "order_id": order_id,
                "previous_status": order["status"],
            },
        )
        return doc_to_model(OrderDB, cancelled)

    async def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        tracking_number: Optional[str] = None,
    ) -> OrderDB:
        """
        Move an order along its lifecycle.

        Moving to CANCELLED goes through `cancel_order` so stock is restored.

        Raises:
            NotFoundError: The order does not exist
            InvalidStatusTransitionError: The transition is not allowed from
                the current status, or the status changed concurrently
        """
        if tracking_number and new_status != OrderStatus.SHIPPED:
            raise DataValidationError(
                "Tracking number can only be set when shipping an order",
                details={"field": "tracking_number"},
            )

        if new_status == OrderStatus.CANCELLED:
            return await self.cancel_order(order_id)

        order = await self._load(order_id)
        current = OrderStatus(order["status"])
        if not can_transition(current, new_status):
            raise InvalidStatusTransitionError(current.value, new_status.value)

        extra = {"tracking_number": tracking_number} if tracking_number else None
        updated = await self.repository.transition_status(
            order["_id"], [current.value], new_status, extra
        )
        if updated is None:
            latest = await self.repository.find_by_id(order["_id"]) or order
            raise InvalidStatusTransitionError(latest["status"], new_status.value)

        logger.info(
            f"Order {order_id} moved to {new_status.value}",
            metadata={
                "event": "order_status_updated",
                "order_id": order_id,
                "from": current.value,
                "to": new_status.value,
            },
        )
        return doc_to_model(OrderDB, updated)

    async def get_order(self, order_id: str, owner_id: Optional[str] = None) -> OrderDB:
        order = await self._load(order_id)
        self._check_owner(order, owner_id)
        return doc_to_model(OrderDB, order)

    async def list_orders(self) -> List[OrderDB]:
        docs = await self.repository.list_all()
        return [doc_to_model(OrderDB, doc) for doc in docs]

    async def list_user_orders(self, user_id: str) -> List[OrderDB]:
        docs = await self.repository.find_by_user(user_id)
        return [doc_to_model(OrderDB, doc) for doc in docs]
