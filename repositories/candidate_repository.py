from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from pymongo import DESCENDING

from domain.models.candidate import Candidate
from repositories.base_repository import MongoRepository, id_variants

# Filters matched as case-insensitive substrings; the rest must match exactly.
_SUBSTRING_FILTERS = {"country": "country", "city": "city"}
_EXACT_FILTERS = {
    "source": "source",
    "gender": "gender",
    "expertise_level": "expertise_level",
}
_SEARCH_FIELDS = ("first_name", "last_name", "email")


def _contains(value: str) -> dict:
    return {"$regex": re.escape(value), "$options": "i"}


def build_candidate_filter(
    search: Optional[str] = None,
    filters: Optional[Dict[str, Any]] = None,
) -> dict:
    """Translate search text and dashboard filters into a Mongo query."""

    clauses: List[dict] = []
    filters = filters or {}

    if search:
        clauses.append({"$or": [{field: _contains(search)} for field in _SEARCH_FIELDS]})

    for key, field in _SUBSTRING_FILTERS.items():
        if filters.get(key):
            clauses.append({field: _contains(filters[key])})

    for key, field in _EXACT_FILTERS.items():
        if filters.get(key):
            clauses.append({field: filters[key]})

    has_cv = filters.get("has_cv")
    if has_cv is True:
        clauses.append({"cv_histories.0": {"$exists": True}})
    elif has_cv is False:
        clauses.append({"cv_histories.0": {"$exists": False}})

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


class CandidateRepository(MongoRepository):
    """Read access to candidate profiles."""

    collection_name = "candidates"

    def find_all(self) -> List[Candidate]:
        cursor = self.collection.find()
        return self._hydrate_all(cursor, Candidate.from_mongo)

    def find_by_id(self, candidate_id: str) -> Optional[Candidate]:
        """Look a candidate up by ObjectId or by string identifier."""

        doc = self.collection.find_one({"_id": {"$in": id_variants(candidate_id)}})
        return Candidate.from_mongo(doc) if doc else None

    def search_candidates(
        self,
        search: Optional[str],
        filters: Optional[Dict[str, Any]],
        skip: int,
        limit: int,
    ) -> Tuple[List[Candidate], int]:
        """Return one page of candidates (newest first) and the total match count."""

        query = build_candidate_filter(search, filters)
        total = self.collection.count_documents(query)
        cursor = (
            self.collection.find(query)
            .sort("created_at", DESCENDING)
            .skip(max(skip, 0))
            .limit(limit)
        )
        return self._hydrate_all(cursor, Candidate.from_mongo), total

    def distinct_values(self, field: str) -> List[str]:
        return self._distinct_values(self.collection.distinct(field))
