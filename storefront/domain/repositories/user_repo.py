# storefront/domain/repositories/user_repo.py
from __future__ import annotations
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from storefront.domain.models.user import Preferences, User
from storefront.domain.repositories.base import store_errors


class UserRepo:
    """User profiles in the 'users' collection, keyed by user_id."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "users"):
        self.col = db[collection_name]

    async def find_by_id(self, user_id: str) -> Optional[User]:
        with store_errors("users.find_by_id"):
            doc = await self.col.find_one({"user_id": user_id}, {"_id": 0})
        return User.model_validate(doc) if doc else None

    async def save(self, user: User) -> User:
        with store_errors("users.save"):
            await self.col.replace_one({"user_id": user.user_id}, user.model_dump(), upsert=True)
        return user

    async def update_preferences(self, user_id: str, preferences: Preferences) -> Optional[User]:
        with store_errors("users.update_preferences"):
            doc = await self.col.find_one_and_update(
                {"user_id": user_id},
                {"$set": {"preferences": preferences.model_dump()}},
                projection={"_id": 0},
                return_document=ReturnDocument.AFTER,
            )
        return User.model_validate(doc) if doc else None

    async def ensure_indexes(self) -> None:
        with store_errors("users.ensure_indexes"):
            await self.col.create_index("user_id", unique=True)
