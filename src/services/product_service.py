"""
Product service layer - business logic for product operations.

Handles validation and orchestration between the product and category
repositories. Stock and rating are not writable here beyond the initial
stock and admin stock corrections; orders and reviews own those fields.
"""

from datetime import datetime, timezone
from typing import List, Optional

from src.config import config
from src.core.errors import DataValidationError, NotFoundError
from src.core.logger import logger
from src.models.common import doc_to_model
from src.models.product import (
    ProductCreate,
    ProductDB,
    ProductFilter,
    ProductSort,
    ProductUpdate,
)
from src.repositories.category_repository import CategoryRepository
from src.repositories.product_repository import ProductRepository


class ProductService:
    """
    Service class for product business logic.

    Separates business logic from route handlers and data access.
    """

    def __init__(self, repository: ProductRepository, category_repository: CategoryRepository):
        self.repository = repository
        self.category_repository = category_repository

    async def _require_category(self, category_id: str):
        category = await self.category_repository.find_by_id(category_id)
        if not category:
            raise NotFoundError("Category not found", details={"category_id": category_id})
        return category["_id"]

    async def list_products(
        self,
        product_filter: Optional[ProductFilter] = None,
        sort: Optional[ProductSort] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ProductDB]:
        """
        List products matching every given filter predicate.

        Args:
            product_filter: Optional conjunction of predicates
            sort: Optional sort field and direction (ascending by default)
            limit: Page size, defaults to DEFAULT_PAGE_SIZE and is capped at MAX_PAGE_SIZE
            offset: Number of products to skip
        """
        if limit is None:
            limit = config.default_page_size
        limit = min(limit, config.max_page_size)

        docs = await self.repository.list_products(product_filter, sort, skip=offset, limit=limit)
        return [doc_to_model(ProductDB, doc) for doc in docs]

    async def get_product(self, product_id: str) -> ProductDB:
        doc = await self.repository.find_by_id(product_id)
        if not doc:
            logger.info(
                f"Product not found: {product_id}",
                metadata={"event": "get_product", "product_id": product_id},
            )
            raise NotFoundError("Product not found", details={"product_id": product_id})
        return doc_to_model(ProductDB, doc)

    async def get_product_by_sku(self, sku: str) -> ProductDB:
        doc = await self.repository.find_by_sku(sku)
        if not doc:
            raise NotFoundError("Product not found", details={"sku": sku})
        return doc_to_model(ProductDB, doc)

    async def search_products(self, search_text: str, limit: Optional[int] = None) -> List[ProductDB]:
        """
        Search products by substring in name, description or tags.

        Raises:
            DataValidationError: If search text is empty
        """
        if not search_text or not search_text.strip():
            raise DataValidationError("Search text cannot be empty")

        docs = await self.repository.search_products(search_text, limit=limit)
        logger.info(
            f"Search completed: found {len(docs)} products",
            metadata={"event": "search_products", "search_text": search_text, "count": len(docs)},
        )
        return [doc_to_model(ProductDB, doc) for doc in docs]

    async def products_in_category(self, category_id: str) -> List[ProductDB]:
        await self._require_category(category_id)
        docs = await self.repository.find_by_category(category_id)
        return [doc_to_model(ProductDB, doc) for doc in docs]

    async def create_product(self, data: ProductCreate) -> ProductDB:
        """
        Create a new product.

        Raises:
            NotFoundError: If the category does not exist
            DataValidationError: If the SKU already exists
        """
        category_oid = await self._require_category(data.category_id)

        if await self.repository.find_by_sku(data.sku):
            logger.warning(
                f"Duplicate SKU: {data.sku}",
                metadata={"event": "duplicate_sku", "sku": data.sku},
            )
            raise DataValidationError(
                "A product with this SKU already exists.", details={"field": "sku"}
            )

        now = datetime.now(timezone.utc)
        document = data.model_dump()
        document.update(
            {
                "category_id": category_oid,
                "rating": {"average": 0.0, "count": 0},
                "is_active": True,
                "created_at": now,
                "updated_at": now,
            }
        )

        doc = await self.repository.create(document)
        logger.info(
            f"Created product {doc['_id']}",
            metadata={"event": "create_product", "product_id": str(doc["_id"]), "sku": data.sku},
        )
        return doc_to_model(ProductDB, doc)

    async def update_product(self, product_id: str, data: ProductUpdate) -> ProductDB:
        """
        Partially update a product; only fields present in the request change.

        Raises:
            NotFoundError: If the product or the new category does not exist
            DataValidationError: If nothing is updated or the prices conflict
        """
        current = await self.repository.find_by_id(product_id)
        if not current:
            raise NotFoundError("Product not found", details={"product_id": product_id})

        update_data = data.model_dump(exclude_unset=True)
        for required in ("name", "description", "price", "category_id", "is_active"):
            if required in update_data and update_data[required] is None:
                raise DataValidationError(f"{required} cannot be null", details={"field": required})
        if not update_data:
            raise DataValidationError("No fields to update")

        if "category_id" in update_data:
            update_data["category_id"] = await self._require_category(update_data["category_id"])

        price = update_data.get("price", current["price"])
        discount = update_data.get("discount_price", current.get("discount_price"))
        if discount is not None and discount > price:
            raise DataValidationError("Discount price cannot exceed price")

        update_data["updated_at"] = datetime.now(timezone.utc)
        doc = await self.repository.find_one_and_update(
            {"_id": current["_id"]}, {"$set": update_data}
        )
        if not doc:
            raise NotFoundError("Product not found", details={"product_id": product_id})

        logger.info(
            f"Updated product {product_id}",
            metadata={"event": "update_product", "product_id": product_id, "fields": sorted(update_data)},
        )
        return doc_to_model(ProductDB, doc)

    async def delete_product(self, product_id: str) -> bool:
        """
        Delete a product. Existing orders keep their price snapshots.

        Returns:
            False if the product did not exist
        """
        return await self.repository.delete(product_id)
