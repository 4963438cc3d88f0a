#!/usr/bin/env python3

import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bson import ObjectId
from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

# Load environment variables
load_dotenv()

from src.config import config
from src.core.auth import hash_password
from src.db.mongodb import CATEGORIES, ORDERS, PRODUCTS, REVIEWS, USERS

DEFAULT_DATA_PATH = Path(__file__).parent.parent / "data" / "sample-data.json"

# Insertion order follows the references between collections
IMPORT_ORDER = [USERS, CATEGORIES, PRODUCTS, ORDERS, REVIEWS]


def to_document(value):
    """Turn `_id` / `*_id` strings into ObjectIds, recursively."""
    if isinstance(value, list):
        return [to_document(v) for v in value]
    if not isinstance(value, dict):
        return value

    doc = {}
    for key, item in value.items():
        if key.endswith("_id") and isinstance(item, str) and ObjectId.is_valid(item):
            doc[key] = ObjectId(item)
        else:
            doc[key] = to_document(item)
    return doc


class StorefrontDatabaseSeeder:
    def __init__(self, data_path: Path):
        self.data_path = data_path
        self.client = None
        self.db = None

    async def connect(self):
        """Establish MongoDB connection"""
        print(f"Connecting to MongoDB database '{config.mongodb_database}'...")
        self.client = AsyncIOMotorClient(config.mongodb_url, tz_aware=True)
        self.db = self.client[config.mongodb_database]

        # Test connection
        await self.db.command('ping')
        print("Successfully connected to MongoDB!")

    def load_data(self) -> dict:
        print(f"Loading data from: {self.data_path}")
        with open(self.data_path, "r") as f:
            return json.load(f)

    async def clear_data(self):
        """Clear existing storefront data"""
        print("Clearing existing data...")
        for name in IMPORT_ORDER:
            result = await self.db[name].delete_many({})
            print(f"Deleted {result.deleted_count} documents from '{name}'")

    def prepare(self, name: str, records: list) -> list:
        now = datetime.now(timezone.utc)
        docs = []
        for record in records:
            doc = to_document(record)
            doc.setdefault("created_at", now)
            if name == USERS and not str(doc.get("password", "")).startswith("$2"):
                doc["password"] = hash_password(doc["password"])
            if name == PRODUCTS:
                doc.setdefault("rating", {"average": 0.0, "count": 0})
                doc.setdefault("is_active", True)
            docs.append(doc)
        return docs

    async def refresh_ratings(self):
        """Recompute every product's rating from the imported reviews."""
        pipeline = [
            {"$group": {"_id": "$product_id", "average": {"$avg": "$rating"}, "count": {"$sum": 1}}}
        ]
        async for summary in self.db[REVIEWS].aggregate(pipeline):
            await self.db[PRODUCTS].update_one(
                {"_id": summary["_id"]},
                {"$set": {"rating": {"average": summary["average"], "count": summary["count"]}}},
            )

    async def seed_data(self):
        """Main seeding method"""
        data = self.load_data()
        await self.clear_data()

        for name in IMPORT_ORDER:
            records = data.get(name) or []
            if not records:
                print(f"No {name} to import")
                continue
            result = await self.db[name].insert_many(self.prepare(name, records))
            print(f"Imported {len(result.inserted_ids)} {name}")

        await self.refresh_ratings()
        print("Data import completed successfully!")

    async def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            print("MongoDB connection closed")


async def main():
    data_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DATA_PATH
    seeder = StorefrontDatabaseSeeder(data_path)

    try:
        print("=" * 50)
        print("Storefront Database Seeder")
        print("=" * 50)

        await seeder.connect()
        await seeder.seed_data()

        print("=" * 50)
        print("Database setup completed!")
        print("=" * 50)
    except Exception as error:
        print(f"Database setup failed: {error}")
        sys.exit(1)
    finally:
        await seeder.close()


if __name__ == "__main__":
    asyncio.run(main())
