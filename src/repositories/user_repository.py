"""User repository"""

from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from src.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository):

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"email": email.lower()})

    async def find_by_username_or_email(self, username: str, email: str) -> Optional[Dict[str, Any]]:
        return await self.find_one({"$or": [{"username": username}, {"email": email.lower()}]})

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.find_many({}, sort=[("created_at", 1)])
