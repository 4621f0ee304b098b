from __future__ import annotations

from typing import List

from pymongo import DESCENDING

from domain.models.candidature import Candidature
from repositories.base_repository import MongoRepository, id_variants


class CandidatureRepository(MongoRepository):
    """Read access to the candidatures collection."""

    collection_name = "candidatures"

    def find_all_with_source(self) -> List[Candidature]:
        """Return all candidatures enriched with the owning candidate's source and gender."""

        # candidate_id may be stored as an ObjectId or as its hex string.
        pipeline = [
            {"$sort": {"date_postulation": -1}},
            {
                "$lookup": {
                    "from": "candidates",
                    "let": {"cid": {"$toString": "$candidate_id"}},
                    "pipeline": [
                        {"$match": {"$expr": {"$eq": [{"$toString": "$_id"}, "$$cid"]}}},
                        {"$project": {"source": 1, "gender": 1}},
                    ],
                    "as": "candidate",
                }
            },
            {
                "$set": {
                    "candidate_source": {
                        "$ifNull": [{"$first": "$candidate.source"}, "unknown"]
                    },
                    "candidate_gender": {"$first": "$candidate.gender"},
                }
            },
            {"$project": {"candidate": 0}},
        ]
        return self._hydrate_all(self.collection.aggregate(pipeline), Candidature.from_mongo)

    def find_by_candidate(self, candidate_id: str) -> List[Candidature]:
        cursor = self.collection.find(
            {"candidate_id": {"$in": id_variants(candidate_id)}}
        ).sort("date_postulation", DESCENDING)
        return self._hydrate_all(cursor, Candidature.from_mongo)
