"""Candidate listing for the admin dashboard.

Filter and pagination state is carried by :class:`CandidateQuery`, a plain
serializable value built from request arguments and handed to
:func:`list_candidates`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from math import ceil
from typing import Any, Dict, List, Mapping, Optional

from config import settings
from domain.models.candidate import Candidate
from middleware.errors import InvalidQueryParameterError, RecordNotFoundError
from repositories.candidate_repository import CandidateRepository
from repositories.candidature_repository import CandidatureRepository

_repo = CandidateRepository()
_candidature_repo = CandidatureRepository()

_BOOL_MAP = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False}

FILTER_KEYS = ("source", "country", "city", "gender", "expertise_level", "has_cv")


def _parse_positive_int(args: Mapping[str, Any], key: str, default: int) -> int:
    raw = args.get(key)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise InvalidQueryParameterError(
            f"'{key}' must be an integer", details={key: raw}
        ) from None
    if value < 1:
        raise InvalidQueryParameterError(f"'{key}' must be at least 1", details={key: raw})
    return value


def _parse_optional_bool(raw: Any, key: str) -> Optional[bool]:
    if raw in (None, ""):
        return None
    parsed = _BOOL_MAP.get(str(raw).strip().lower())
    if parsed is None:
        raise InvalidQueryParameterError(f"'{key}' must be true or false", details={key: raw})
    return parsed


def _clean(value: Any) -> Optional[str]:
    text = str(value).strip() if value is not None else ""
    return text or None


@dataclass(frozen=True)
class CandidateQuery:
    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE
    search: Optional[str] = None
    source: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    gender: Optional[str] = None
    expertise_level: Optional[str] = None
    has_cv: Optional[bool] = None

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "CandidateQuery":
        """Build a query from request args (camelCase or snake_case keys)."""

        limit = min(_parse_positive_int(args, "limit", settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)
        return cls(
            page=_parse_positive_int(args, "page", 1),
            limit=limit,
            search=_clean(args.get("search")),
            source=_clean(args.get("source")),
            country=_clean(args.get("country")),
            city=_clean(args.get("city")),
            gender=_clean(args.get("gender")),
            expertise_level=_clean(args.get("expertiseLevel") or args.get("expertise_level")),
            has_cv=_parse_optional_bool(args.get("hasCv", args.get("has_cv")), "hasCv"),
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def filters(self) -> Dict[str, Any]:
        """Only the filters that are actually set."""
        data = asdict(self)
        return {key: data[key] for key in FILTER_KEYS if data[key] is not None}


@dataclass
class CandidatePage:
    data: List[Candidate] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> dict:
        return {
            "data": [candidate.to_dict() for candidate in self.data],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def list_candidates(query: CandidateQuery) -> CandidatePage:
    """Return one page of candidates matching ``query``, newest first."""

    candidates, total = _repo.search_candidates(
        query.search, query.filters(), query.skip, query.limit
    )
    return CandidatePage(data=candidates, total=total, page=query.page, limit=query.limit)


def get_candidate(candidate_id: str) -> Candidate:
    candidate = _repo.find_by_id(candidate_id)
    if candidate is None:
        raise RecordNotFoundError("Candidate not found", details={"id": candidate_id})
    return candidate


def get_candidate_with_candidatures(candidate_id: str) -> Dict[str, Any]:
    candidate = get_candidate(candidate_id)
    candidatures = _candidature_repo.find_by_candidate(candidate.id or candidate_id)
    return {
        **candidate.to_dict(),
        "candidatures": [c.to_dict() for c in candidatures],
    }


def get_filter_values() -> Dict[str, List[str]]:
    """Distinct values offered by the dashboard's filter dropdowns."""

    return {
        "sources": _repo.distinct_values("source"),
        "genders": _repo.distinct_values("gender"),
        "educationLevels": _repo.distinct_values("education_level"),
    }


def list_all_candidatures() -> List[Dict[str, Any]]:
    return [c.to_dict() for c in _candidature_repo.find_all_with_source()]
