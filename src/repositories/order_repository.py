"""Order repository"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from src.models.order import OrderStatus
from src.repositories.base_repository import BaseRepository, DocumentId


class OrderRepository(BaseRepository):

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.find_many({}, sort=[("created_at", -1)])

    async def find_by_user(self, user_id: DocumentId) -> List[Dict[str, Any]]:
        return await self.find_many(
            {"user_id": self._to_object_id(user_id)}, sort=[("created_at", -1)]
        )

    async def transition_status(
        self,
        order_id: DocumentId,
        from_statuses: Iterable[str],
        to_status: OrderStatus,
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Compare-and-swap the order status.

        The update applies only while the stored status is one of
        `from_statuses`, so of two concurrent transitions at most one wins.

        Returns:
            The order after the update, or None if the status had changed
            (or the order is gone).
        """
        fields = {"status": to_status.value, "updated_at": datetime.now(timezone.utc)}
        if extra_fields:
            fields.update(extra_fields)

        return await self.find_one_and_update(
            {"_id": self._to_object_id(order_id), "status": {"$in": list(from_statuses)}},
            {"$set": fields},
        )

    async def has_delivered_product(self, user_id: DocumentId, product_id: DocumentId) -> bool:
        return await self.exists(
            {
                "user_id": self._to_object_id(user_id),
                "status": OrderStatus.DELIVERED.value,
                "items.product_id": self._to_object_id(product_id),
            }
        )
