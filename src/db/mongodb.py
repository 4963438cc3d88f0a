"""
MongoDB database connection management
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from src.config import config
from src.core.errors import StoreUnavailableError
from src.core.logger import logger

USERS = "users"
CATEGORIES = "categories"
PRODUCTS = "products"
ORDERS = "orders"
REVIEWS = "reviews"


class Database:
    """Database connection manager"""

    client: Optional[AsyncIOMotorClient] = None
    database: Optional[AsyncIOMotorDatabase] = None


db = Database()


async def connect_to_mongo():
    """Create database connection"""
    logger.info(
        "Connecting to MongoDB...",
        metadata={"event": "mongodb_connect_attempt", "database": config.mongodb_database},
    )

    try:
        db.client = AsyncIOMotorClient(config.mongodb_url, tz_aware=True)
        db.database = db.client[config.mongodb_database]

        await db.client.admin.command('ping')

        logger.info(
            f"Successfully connected to MongoDB database '{config.mongodb_database}'",
            metadata={"event": "mongodb_connected", "database": config.mongodb_database},
        )
    except PyMongoError as e:
        logger.error(
            f"Could not connect to MongoDB: {e}",
            metadata={"event": "mongodb_connection_error"},
            error=e,
        )
        raise StoreUnavailableError(f"Could not connect to MongoDB: {e}")


async def close_mongo_connection():
    """Close database connection"""
    logger.info("Closing connection to MongoDB...")
    if db.client is not None:
        db.client.close()
        db.client = None
        db.database = None


async def get_database() -> AsyncIOMotorDatabase:
    if db.database is None:
        await connect_to_mongo()
    return db.database


async def ping() -> bool:
    """Check that the MongoDB server answers"""
    try:
        database = await get_database()
        await database.command('ping')
        return True
    except (PyMongoError, StoreUnavailableError):
        return False


async def get_users_collection() -> AsyncIOMotorCollection:
    database = await get_database()
    return database[USERS]


async def get_categories_collection() -> AsyncIOMotorCollection:
    database = await get_database()
    return database[CATEGORIES]


async def get_products_collection() -> AsyncIOMotorCollection:
    database = await get_database()
    return database[PRODUCTS]


async def get_orders_collection() -> AsyncIOMotorCollection:
    database = await get_database()
    return database[ORDERS]


async def get_reviews_collection() -> AsyncIOMotorCollection:
    database = await get_database()
    return database[REVIEWS]
