#!/usr/bin/env python3

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

load_dotenv()

from src.config import config
from src.db.mongodb import CATEGORIES, ORDERS, PRODUCTS, REVIEWS, USERS

COLLECTIONS = [USERS, CATEGORIES, PRODUCTS, ORDERS, REVIEWS]


class StorefrontDatabaseCleaner:
    def __init__(self):
        self.client = None
        self.db = None

    async def connect(self):
        """Establish MongoDB connection"""
        print(f"Connecting to MongoDB database '{config.mongodb_database}'...")
        self.client = AsyncIOMotorClient(config.mongodb_url)
        self.db = self.client[config.mongodb_database]

        await self.db.command('ping')
        print("Successfully connected to MongoDB!")

    async def clear_all_data(self):
        """Delete every document, keeping collections and indexes"""
        for name in COLLECTIONS:
            result = await self.db[name].delete_many({})
            print(f"Deleted {result.deleted_count} documents from '{name}' collection")
        print("All storefront data cleared successfully!")

    async def drop_all_collections(self):
        """Drop the collections; indexes are recreated on the next service start"""
        existing = set(await self.db.list_collection_names())
        for name in COLLECTIONS:
            if name in existing:
                await self.db[name].drop()
                print(f"Dropped collection: {name}")
        print("All storefront collections dropped successfully!")

    async def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            print("MongoDB connection closed")


async def main():
    cleaner = StorefrontDatabaseCleaner()
    operation = sys.argv[1] if len(sys.argv) > 1 else "clear"
    if operation not in ("clear", "drop"):
        print("Usage: clear.py [clear|drop]")
        sys.exit(2)

    try:
        print("=" * 50)
        print("Storefront Database Cleaner")
        print("=" * 50)

        await cleaner.connect()

        if operation == "drop":
            await cleaner.drop_all_collections()
        else:
            await cleaner.clear_all_data()

        print("=" * 50)
        print(f"Database {operation} completed!")
        print("=" * 50)
    except Exception as error:
        print(f"Database {operation} failed: {error}")
        sys.exit(1)
    finally:
        await cleaner.close()


if __name__ == "__main__":
    asyncio.run(main())
