from __future__ import annotations

from typing import List

from pymongo import DESCENDING

from domain.models.inquiry import CompanyRequest, ContactMessage
from repositories.base_repository import MongoRepository


class ContactMessageRepository(MongoRepository):
    collection_name = "contact_messages"

    def find_all(self) -> List[ContactMessage]:
        cursor = self.collection.find({}, {"_id": 1, "created_at": 1}).sort(
            "created_at", DESCENDING
        )
        return self._hydrate_all(cursor, ContactMessage.from_mongo)


class CompanyRequestRepository(MongoRepository):
    collection_name = "company_requests"

    def find_all(self) -> List[CompanyRequest]:
        cursor = self.collection.find().sort("created_at", DESCENDING)
        return self._hydrate_all(cursor, CompanyRequest.from_mongo)


class CategoryRepository(MongoRepository):
    """Job categories candidates apply to; only counted by the dashboard."""

    collection_name = "categories"
