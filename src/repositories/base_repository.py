"""
Base repository pattern for MongoDB data access.

Provides generic CRUD operations for MongoDB collections with async/await support.
All collection repositories inherit from BaseRepository.

Driver errors are translated at this boundary: duplicate keys become
DataValidationError, everything else StoreUnavailableError (transient).
"""

from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from src.core.errors import translate_store_error
from src.core.logger import logger
from src.utils.validators import validate_object_id

DocumentId = Union[str, ObjectId]


class BaseRepository:
    """
    Base repository providing generic CRUD operations for MongoDB collections.

    Usage:
        class ProductRepository(BaseRepository):
            def __init__(self, collection: AsyncIOMotorCollection):
                super().__init__(collection)
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection
        self.collection_name = collection.name

    def _to_object_id(self, document_id: DocumentId) -> ObjectId:
        return validate_object_id(document_id, field=f"{self.collection_name} id")

    def _store_error(self, operation: str, error: PyMongoError, **metadata):
        logger.error(
            f"Error during {operation} in {self.collection_name}",
            error=error,
            metadata={"collection": self.collection_name, **metadata},
        )
        return translate_store_error(error)

    async def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new document.

        Args:
            document: Document data to insert

        Returns:
            Dict: The inserted document including its generated `_id`
        """
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise self._store_error("insert", e) from e

        document["_id"] = result.inserted_id
        logger.debug(
            f"Document created in {self.collection_name}",
            metadata={"collection": self.collection_name, "documentId": str(result.inserted_id)},
        )
        return document

    async def find_by_id(self, document_id: DocumentId) -> Optional[Dict[str, Any]]:
        """
        Find a document by ID.

        Returns:
            Optional[Dict]: Document if found, None otherwise
        """
        oid = self._to_object_id(document_id)
        try:
            return await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._store_error("find_by_id", e, documentId=str(oid)) from e

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one(query)
        except PyMongoError as e:
            raise self._store_error("find_one", e) from e

    async def find_many(
        self,
        query: Dict[str, Any],
        skip: int = 0,
        limit: Optional[int] = None,
        sort: Optional[List[tuple]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents matching query.

        Args:
            query: MongoDB query filter
            skip: Number of documents to skip
            limit: Maximum number of documents to return (None for all)
            sort: Sort specification as (field, direction) pairs

        Returns:
            List[Dict]: List of matching documents
        """
        try:
            cursor = self.collection.find(query)

            if sort:
                cursor = cursor.sort(sort)

            if skip:
                cursor = cursor.skip(skip)

            if limit:
                cursor = cursor.limit(limit)

            documents = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise self._store_error("find_many", e) from e

        logger.debug(
            f"Found {len(documents)} documents in {self.collection_name}",
            metadata={"collection": self.collection_name, "count": len(documents)},
        )
        return documents

    async def update(self, document_id: DocumentId, update_data: Dict[str, Any]) -> bool:
        """
        Update a document by ID.

        Args:
            document_id: Document ID to update
            update_data: Update operations ($set, $inc, ...)

        Returns:
            bool: True if a document matched
        """
        oid = self._to_object_id(document_id)
        try:
            result = await self.collection.update_one({"_id": oid}, update_data)
        except PyMongoError as e:
            raise self._store_error("update", e, documentId=str(oid)) from e
        return result.matched_count > 0

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update_data: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Atomically apply an update to the first document matching query.

        Returns:
            Optional[Dict]: The document after the update, None if nothing matched
        """
        try:
            return await self.collection.find_one_and_update(
                query, update_data, return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise self._store_error("find_one_and_update", e) from e

    async def delete(self, document_id: DocumentId) -> bool:
        """
        Delete a document by ID.

        Returns:
            bool: True if deleted, False otherwise
        """
        oid = self._to_object_id(document_id)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise self._store_error("delete", e, documentId=str(oid)) from e

        success = result.deleted_count > 0
        logger.info(
            f"Document {'deleted' if success else 'not found'} in {self.collection_name}",
            metadata={"collection": self.collection_name, "documentId": str(oid)},
        )
        return success

    async def count(self, query: Dict[str, Any]) -> int:
        try:
            return await self.collection.count_documents(query)
        except PyMongoError as e:
            raise self._store_error("count", e) from e

    async def exists(self, query: Dict[str, Any]) -> bool:
        count = await self.count(query)
        return count > 0
