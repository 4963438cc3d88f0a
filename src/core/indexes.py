"""
Database index management for MongoDB.

Unique indexes back the uniqueness rules (username, email, category name,
SKU); the rest serve the reference lookups and catalog listing.
Indexes are created at application startup.
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from src.core.logger import logger
from src.db.mongodb import CATEGORIES, ORDERS, PRODUCTS, REVIEWS, USERS


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create all required MongoDB indexes.

    Args:
        db: MongoDB database instance
    """
    try:
        users = db[USERS]
        await users.create_index([("username", ASCENDING)], unique=True, name="idx_username_unique")
        await users.create_index([("email", ASCENDING)], unique=True, name="idx_email_unique")

        categories = db[CATEGORIES]
        await categories.create_index([("name", ASCENDING)], unique=True, name="idx_name_unique")
        await categories.create_index([("parent_category_id", ASCENDING)], name="idx_parent_category")

        products = db[PRODUCTS]
        await products.create_index([("sku", ASCENDING)], unique=True, name="idx_sku_unique")
        await products.create_index(
            [("category_id", ASCENDING), ("price", ASCENDING)],
            name="idx_category_price"
        )
        await products.create_index([("brand", ASCENDING)], name="idx_brand")
        await products.create_index([("tags", ASCENDING)], name="idx_tags")
        await products.create_index([("rating.average", DESCENDING)], name="idx_rating")
        await products.create_index([("created_at", DESCENDING)], name="idx_created")

        orders = db[ORDERS]
        await orders.create_index(
            [("user_id", ASCENDING), ("created_at", DESCENDING)],
            name="idx_user_created"
        )
        await orders.create_index([("items.product_id", ASCENDING)], name="idx_item_product")

        reviews = db[REVIEWS]
        await reviews.create_index([("product_id", ASCENDING)], name="idx_product")
        await reviews.create_index([("user_id", ASCENDING)], name="idx_user")

        logger.info("All database indexes created successfully", metadata={"event": "indexes_created"})

    except PyMongoError as e:
        logger.error("Failed to create database indexes", error=e)
        raise

