"""
Product repository for domain-specific data access operations.

Extends BaseRepository with:
- Filtered, sorted, paginated listing
- Case-insensitive substring search
- SKU and category lookups
- Atomic stock and rating updates
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING

from src.core.logger import logger
from src.models.common import SortOrder
from src.models.product import SORT_FIELDS, ProductFilter, ProductSort
from src.repositories.base_repository import BaseRepository, DocumentId


class ProductRepository(BaseRepository):
    """
    Repository for product data access.

    Stock is only ever changed through `decrement_stock` and
    `increment_stock`, both single atomic `$inc` updates.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    def build_filter_query(self, product_filter: Optional[ProductFilter]) -> Dict[str, Any]:
        """
        Translate a ProductFilter into a MongoDB query; every predicate
        present is combined with AND.
        """
        query: Dict[str, Any] = {}
        if product_filter is None:
            return query

        if product_filter.category_id:
            query["category_id"] = self._to_object_id(product_filter.category_id)

        if product_filter.min_price is not None or product_filter.max_price is not None:
            price_query = {}
            if product_filter.min_price is not None:
                price_query["$gte"] = product_filter.min_price
            if product_filter.max_price is not None:
                price_query["$lte"] = product_filter.max_price
            query["price"] = price_query

        if product_filter.brand:
            query["brand"] = product_filter.brand

        if product_filter.in_stock:
            query["stock"] = {"$gt": 0}

        if product_filter.tags:
            query["tags"] = {"$in": product_filter.tags}

        if product_filter.is_active is not None:
            query["is_active"] = product_filter.is_active

        return query

    @staticmethod
    def build_sort(sort: Optional[ProductSort]) -> Optional[List[Tuple[str, int]]]:
        if sort is None:
            return None
        direction = DESCENDING if sort.order == SortOrder.DESC else ASCENDING
        return [(SORT_FIELDS[sort.field], direction)]

    async def list_products(
        self,
        product_filter: Optional[ProductFilter] = None,
        sort: Optional[ProductSort] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        query = self.build_filter_query(product_filter)
        logger.debug(
            "Listing products",
            metadata={"query": str(query), "skip": skip, "limit": limit},
        )
        return await self.find_many(query, skip=skip, limit=limit, sort=self.build_sort(sort))

    async def search_products(self, search_text: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Case-insensitive substring match on name, description or any tag.

        The search text is matched literally, not as a regular expression.
        """
        pattern = {"$regex": re.escape(search_text.strip()), "$options": "i"}
        query = {
            "$or": [
                {"name": pattern},
                {"description": pattern},
                {"tags": pattern},
            ]
        }
        return await self.find_many(query, limit=limit)

    async def find_by_sku(self, sku: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"sku": sku})

    async def find_by_category(self, category_id: DocumentId) -> List[Dict[str, Any]]:
        return await self.find_many({"category_id": self._to_object_id(category_id)})

    async def has_products_in_category(self, category_id: DocumentId) -> bool:
        return await self.exists({"category_id": self._to_object_id(category_id)})

    async def decrement_stock(self, product_id: DocumentId, quantity: int) -> Optional[Dict[str, Any]]:
        """
        Take `quantity` units out of stock only if that many are available.

        Returns:
            The product after the decrement, or None when the product is gone
            or holds fewer than `quantity` units.
        """
        return await self.find_one_and_update(
            {"_id": self._to_object_id(product_id), "stock": {"$gte": quantity}},
            {
                "$inc": {"stock": -quantity},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )

    async def increment_stock(self, product_id: DocumentId, quantity: int) -> Optional[Dict[str, Any]]:
        """
        Put `quantity` units back into stock.

        Returns:
            The product after the increment, or None if it no longer exists.
        """
        return await self.find_one_and_update(
            {"_id": self._to_object_id(product_id)},
            {
                "$inc": {"stock": quantity},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )

    async def set_rating(self, product_id: DocumentId, average: float, count: int) -> bool:
        return await self.update(
            product_id,
            {"$set": {"rating": {"average": average, "count": count}}},
        )
