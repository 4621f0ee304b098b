from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo.collection import Collection

from config.database import mongodb

logger = logging.getLogger(__name__)

M = TypeVar("M")


def id_variants(value: Any) -> List[Any]:
    """Return ``value`` as an ObjectId (when it parses as one) and as a string.

    Identifiers reach the collections either way, so lookups match both.
    """

    variants: List[Any] = [str(value)]
    try:
        variants.insert(0, ObjectId(str(value)))
    except (InvalidId, TypeError):
        pass
    return variants


class MongoRepository:
    """Base class resolving its collection on first access."""

    collection_name: str = ""

    def __init__(self, collection: Optional[Collection] = None) -> None:
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = mongodb.collection(self.collection_name)
        return self._collection

    def count(self, query: Optional[dict] = None) -> int:
        return self.collection.count_documents(query or {})

    def _hydrate_all(
        self, docs: Iterable[dict], factory: Callable[[dict], Optional[M]]
    ) -> List[M]:
        """Build models from documents, skipping ones that fail validation."""

        results: List[M] = []
        for doc in docs:
            try:
                model = factory(doc)
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid %s document %s: %s",
                    self.collection_name,
                    doc.get("_id"),
                    exc.error_count(),
                )
                continue
            if model is not None:
                results.append(model)
        return results

    @staticmethod
    def _distinct_values(values: Iterable[Any]) -> List[str]:
        cleaned = {str(v).strip() for v in values if v is not None and str(v).strip()}
        return sorted(cleaned)
