"""Category repository"""

from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from src.repositories.base_repository import BaseRepository, DocumentId


class CategoryRepository(BaseRepository):
    """
    Categories form a tree through `parent_category_id`; a missing or null
    parent marks a top-level category.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.find_many({}, sort=[("name", 1)])

    async def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"name": name})

    async def find_top_level(self) -> List[Dict[str, Any]]:
        # {"field": None} matches both null and absent fields
        return await self.find_many({"parent_category_id": None}, sort=[("name", 1)])

    async def find_children(self, category_id: DocumentId) -> List[Dict[str, Any]]:
        return await self.find_many(
            {"parent_category_id": self._to_object_id(category_id)}, sort=[("name", 1)]
        )

    async def has_children(self, category_id: DocumentId) -> bool:
        return await self.exists({"parent_category_id": self._to_object_id(category_id)})
