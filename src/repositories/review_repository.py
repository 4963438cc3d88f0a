"""Review repository"""

from typing import Any, Dict, List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from src.repositories.base_repository import BaseRepository, DocumentId


class ReviewRepository(BaseRepository):

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    async def find_by_product(self, product_id: DocumentId) -> List[Dict[str, Any]]:
        return await self.find_many(
            {"product_id": self._to_object_id(product_id)}, sort=[("created_at", -1)]
        )

    async def find_by_user(self, user_id: DocumentId) -> List[Dict[str, Any]]:
        return await self.find_many(
            {"user_id": self._to_object_id(user_id)}, sort=[("created_at", -1)]
        )

    async def rating_summary(self, product_id: DocumentId) -> Tuple[float, int]:
        """
        Mean rating and review count over every review of a product,
        computed by the server in one aggregation.

        Returns:
            (average, count); (0.0, 0) when the product has no reviews
        """
        pipeline = [
            {"$match": {"product_id": self._to_object_id(product_id)}},
            {"$group": {"_id": None, "average": {"$avg": "$rating"}, "count": {"$sum": 1}}},
        ]
        try:
            results = await self.collection.aggregate(pipeline).to_list(length=1)
        except PyMongoError as e:
            raise self._store_error("rating_summary", e, productId=str(product_id)) from e

        if not results:
            return 0.0, 0
        return float(results[0]["average"]), int(results[0]["count"])

    async def increment_helpful(self, review_id: DocumentId) -> Optional[Dict[str, Any]]:
        return await self.find_one_and_update(
            {"_id": self._to_object_id(review_id)},
            {"$inc": {"helpful": 1}},
        )
