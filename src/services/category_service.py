"""
Category service layer - category tree maintenance.
"""

from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId

from src.config import config
from src.core.errors import DataValidationError, NotFoundError
from src.core.logger import logger
from src.models.category import CategoryCreate, CategoryDB, CategoryUpdate
from src.models.common import doc_to_model
from src.repositories.category_repository import CategoryRepository
from src.repositories.product_repository import ProductRepository


class CategoryService:
    """
    Service class for categories.

    Categories form a tree: re-parenting is checked so that no category
    becomes its own ancestor.
    """

    def __init__(self, repository: CategoryRepository, product_repository: ProductRepository):
        self.repository = repository
        self.product_repository = product_repository

    async def list_categories(self) -> List[CategoryDB]:
        docs = await self.repository.list_all()
        return [doc_to_model(CategoryDB, doc) for doc in docs]

    async def get_category(self, category_id: str) -> CategoryDB:
        doc = await self.repository.find_by_id(category_id)
        if not doc:
            raise NotFoundError("Category not found", details={"category_id": category_id})
        return doc_to_model(CategoryDB, doc)

    async def top_level_categories(self) -> List[CategoryDB]:
        docs = await self.repository.find_top_level()
        return [doc_to_model(CategoryDB, doc) for doc in docs]

    async def subcategories(self, category_id: str) -> List[CategoryDB]:
        await self.get_category(category_id)
        docs = await self.repository.find_children(category_id)
        return [doc_to_model(CategoryDB, doc) for doc in docs]

    async def _require_unique_name(self, name: str, exclude_id: Optional[ObjectId] = None):
        existing = await self.repository.find_by_name(name)
        if existing and existing["_id"] != exclude_id:
            raise DataValidationError(
                "A category with this name already exists", details={"field": "name"}
            )

    async def _resolve_parent(self, parent_category_id: str) -> ObjectId:
        parent = await self.repository.find_by_id(parent_category_id)
        if not parent:
            raise NotFoundError(
                "Parent category not found",
                details={"parent_category_id": parent_category_id},
            )
        return parent["_id"]

    async def _ensure_acyclic(self, category_id: ObjectId, new_parent_id: ObjectId):
        """
        Walk up from the proposed parent; reaching `category_id` means the
        assignment would close a cycle.
        """
        current = new_parent_id
        for _ in range(config.max_category_depth):
            if current is None:
                return
            if current == category_id:
                raise DataValidationError(
                    "A category cannot be placed under itself or one of its subcategories",
                    details={"category_id": str(category_id), "parent_category_id": str(new_parent_id)},
                )
            parent = await self.repository.find_by_id(current)
            current = parent.get("parent_category_id") if parent else None

        if current is None:
            return
        raise DataValidationError(
            "Category hierarchy is too deep",
            details={"max_depth": config.max_category_depth},
        )

    async def create_category(self, data: CategoryCreate) -> CategoryDB:
        await self._require_unique_name(data.name)

        parent_id = None
        if data.parent_category_id:
            parent_id = await self._resolve_parent(data.parent_category_id)

        doc = await self.repository.create(
            {
                "name": data.name,
                "description": data.description,
                "image": data.image,
                "parent_category_id": parent_id,
                "created_at": datetime.now(timezone.utc),
            }
        )
        logger.info(
            f"Created category {doc['_id']}",
            metadata={"event": "create_category", "category_id": str(doc["_id"])},
        )
        return doc_to_model(CategoryDB, doc)

    async def update_category(self, category_id: str, data: CategoryUpdate) -> CategoryDB:
        """
        Partial update; only fields present in the request change.
        An explicit null `parent_category_id` moves the category to the top level.
        """
        doc = await self.repository.find_by_id(category_id)
        if not doc:
            raise NotFoundError("Category not found", details={"category_id": category_id})

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise DataValidationError("No fields to update")

        if "name" in update_data:
            if update_data["name"] is None:
                raise DataValidationError("name cannot be null", details={"field": "name"})
            if update_data["name"] != doc["name"]:
                await self._require_unique_name(update_data["name"], exclude_id=doc["_id"])

        if "parent_category_id" in update_data:
            if update_data["parent_category_id"]:
                parent_id = await self._resolve_parent(update_data["parent_category_id"])
                await self._ensure_acyclic(doc["_id"], parent_id)
                update_data["parent_category_id"] = parent_id
            else:
                update_data["parent_category_id"] = None

        update_data["updated_at"] = datetime.now(timezone.utc)
        updated = await self.repository.find_one_and_update(
            {"_id": doc["_id"]}, {"$set": update_data}
        )
        if not updated:
            raise NotFoundError("Category not found", details={"category_id": category_id})

        logger.info(
            f"Updated category {category_id}",
            metadata={"event": "update_category", "category_id": category_id},
        )
        return doc_to_model(CategoryDB, updated)

    async def delete_category(self, category_id: str) -> bool:
        """
        Delete a category that nothing references any more.

        Returns:
            False if the category does not exist

        Raises:
            DataValidationError: Products or subcategories still reference it
        """
        doc = await self.repository.find_by_id(category_id)
        if not doc:
            return False

        if await self.product_repository.has_products_in_category(doc["_id"]):
            raise DataValidationError(
                "Category still has products", details={"category_id": category_id}
            )
        if await self.repository.has_children(doc["_id"]):
            raise DataValidationError(
                "Category still has subcategories", details={"category_id": category_id}
            )

        deleted = await self.repository.delete(doc["_id"])
        if deleted:
            logger.info(
                f"Deleted category {category_id}",
                metadata={"event": "delete_category", "category_id": category_id},
            )
        return deleted
