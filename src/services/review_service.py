"""
Review service layer.

Every write to a product's reviews (create, rating update, delete) is
followed by a recompute of the product's rating aggregate from the stored
reviews, so the aggregate never drifts from what is actually stored.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from bson import ObjectId

from src.core.errors import DataValidationError, ErrorResponse, NotFoundError
from src.core.logger import logger
from src.models.common import doc_to_model
from src.models.review import ReviewCreate, ReviewDB, ReviewUpdate
from src.repositories.order_repository import OrderRepository
from src.repositories.product_repository import ProductRepository
from src.repositories.review_repository import ReviewRepository
from src.utils.locks import KeyedLock
from src.utils.validators import validate_object_id

# One recompute at a time per product
_rating_locks = KeyedLock()


class ReviewService:

    def __init__(
        self,
        repository: ReviewRepository,
        product_repository: ProductRepository,
        order_repository: OrderRepository,
    ):
        self.repository = repository
        self.product_repository = product_repository
        self.order_repository = order_repository

    async def _load(self, review_id: str) -> Dict[str, Any]:
        doc = await self.repository.find_by_id(review_id)
        if not doc:
            raise NotFoundError("Review not found", details={"review_id": review_id})
        return doc

    @staticmethod
    def _check_author(review: Dict[str, Any], user_id: str, is_admin: bool):
        if not is_admin and str(review["user_id"]) != user_id:
            raise ErrorResponse(
                "You can only modify your own reviews.", status_code=403
            )

    async def recompute_rating(self, product_id: ObjectId):
        """Recalculate a product's average rating and review count."""
        async with _rating_locks.hold(product_id):
            average, count = await self.repository.rating_summary(product_id)
            await self.product_repository.set_rating(product_id, average, count)

        logger.debug(
            "Product rating recomputed",
            metadata={
                "event": "rating_recomputed",
                "product_id": str(product_id),
                "average": average,
                "count": count,
            },
        )

    async def create_review(self, user_id: str, data: ReviewCreate) -> ReviewDB:
        """
        Add a review by `user_id`.

        The review is marked verified when the user has a delivered order
        containing the product.

        Raises:
            NotFoundError: The product does not exist
        """
        user_oid = validate_object_id(user_id, field="user_id")
        product = await self.product_repository.find_by_id(data.product_id)
        if not product:
            raise NotFoundError("Product not found", details={"product_id": data.product_id})

        verified = await self.order_repository.has_delivered_product(user_oid, product["_id"])
        doc = await self.repository.create(
            {
                "user_id": user_oid,
                "product_id": product["_id"],
                "rating": data.rating,
                "comment": data.comment,
                "title": data.title,
                "helpful": 0,
                "verified": verified,
                "created_at": datetime.now(timezone.utc),
            }
        )
        await self.recompute_rating(product["_id"])

        logger.info(
            f"Created review {doc['_id']}",
            user_id=user_id,
            metadata={
                "event": "review_created",
                "review_id": str(doc["_id"]),
                "product_id": data.product_id,
                "verified": verified,
            },
        )
        return doc_to_model(ReviewDB, doc)

    async def update_review(
        self, review_id: str, data: ReviewUpdate, user_id: str, is_admin: bool = False
    ) -> ReviewDB:
        """
        Partially update a review. A null comment or title clears it.

        Raises:
            NotFoundError: The review does not exist
            DataValidationError: Nothing to update, or an explicit null rating
        """
        review = await self._load(review_id)
        self._check_author(review, user_id, is_admin)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise DataValidationError("No fields to update")
        if "rating" in update_data and update_data["rating"] is None:
            raise DataValidationError("rating cannot be null", details={"field": "rating"})

        update_data["updated_at"] = datetime.now(timezone.utc)
        updated = await self.repository.find_one_and_update(
            {"_id": review["_id"]}, {"$set": update_data}
        )
        if not updated:
            raise NotFoundError("Review not found", details={"review_id": review_id})

        if "rating" in update_data:
            await self.recompute_rating(review["product_id"])

        logger.info(
            f"Updated review {review_id}",
            user_id=user_id,
            metadata={"event": "review_updated", "review_id": review_id},
        )
        return doc_to_model(ReviewDB, updated)

    async def delete_review(self, review_id: str, user_id: str, is_admin: bool = False) -> bool:
        """
        Delete a review and refresh the product's rating.

        Returns:
            False if the review did not exist
        """
        review = await self.repository.find_by_id(review_id)
        if not review:
            return False
        self._check_author(review, user_id, is_admin)

        deleted = await self.repository.delete(review["_id"])
        if deleted:
            await self.recompute_rating(review["product_id"])
            logger.info(
                f"Deleted review {review_id}",
                user_id=user_id,
                metadata={"event": "review_deleted", "review_id": review_id},
            )
        return deleted

    async def mark_helpful(self, review_id: str) -> ReviewDB:
        doc = await self.repository.increment_helpful(review_id)
        if not doc:
            raise NotFoundError("Review not found", details={"review_id": review_id})
        return doc_to_model(ReviewDB, doc)

    async def get_review(self, review_id: str) -> ReviewDB:
        return doc_to_model(ReviewDB, await self._load(review_id))

    async def list_product_reviews(self, product_id: str) -> List[ReviewDB]:
        docs = await self.repository.find_by_product(product_id)
        return [doc_to_model(ReviewDB, doc) for doc in docs]

    async def list_user_reviews(self, user_id: str) -> List[ReviewDB]:
        docs = await self.repository.find_by_user(user_id)
        return [doc_to_model(ReviewDB, doc) for doc in docs]
