from __future__ import annotations

from typing import Optional

from domain.models.user import AdminUser
from repositories.base_repository import MongoRepository


class UserRepository(MongoRepository):
    """Lookup and creation of back-office users."""

    collection_name = "users"

    def create(self, user: AdminUser) -> str:
        result = self.collection.insert_one(user.to_mongo())
        return str(result.inserted_id)

    def get_by_username(self, username: str) -> Optional[AdminUser]:
        doc = self.collection.find_one({"username": username})
        return AdminUser.from_mongo(doc)
