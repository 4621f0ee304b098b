"""Statistics shown on the admin dashboard.

The ``compute_*`` functions are pure: they take already-loaded collections and
an optional ``now`` and never touch the database. The ``get_*`` functions load
collections through the repositories and degrade to empty inputs when the
datastore is unavailable, so the worst case is an all-zero view-model.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from config import settings
from domain.models.candidate import Candidate, CrmSyncStatus
from domain.models.candidature import CLOSED_STATUSES, Candidature
from domain.models.statistics import (
    ActivityStatistics,
    AdvancedStatistics,
    CategoryCount,
    GlobalStatistics,
    HourCount,
    LocationCount,
    NewVsOld,
    PeriodCounts,
    StatusCount,
    TrackingStatistics,
)
from middleware.errors import RemoteStatisticsError
from repositories.candidate_repository import CandidateRepository
from repositories.candidature_repository import CandidatureRepository
from repositories.inquiry_repository import CategoryRepository, ContactMessageRepository
from services.remote_stats_client import RemoteStatisticsClient
from services.weekly_service import compare_weeks
from utils.aggregation import breakdown, count_by, hourly_histogram, percentage
from utils.dates import date_to_iso, days_between, start_of_day
from utils.normalization import (
    FEMALE,
    MALE,
    normalize_gender,
    normalize_location,
    normalize_mission_type,
    normalize_status,
)
from utils.periods import compute_period_boundaries

logger = logging.getLogger(__name__)

_candidature_repo = CandidatureRepository()
_candidate_repo = CandidateRepository()
_category_repo = CategoryRepository()
_contact_repo = ContactMessageRepository()
_remote_client = RemoteStatisticsClient()

PORTAL_REGISTRATION = "portal_registration"
MONTHLY_PERIOD = "mensuelle"
RECENT_PERIOD = "hebdomadaire"
RECENT_DAYS = 10


# ---------------------------------------------------------------------------
# Pure computations
# ---------------------------------------------------------------------------

def _count_since(dates: Sequence[Optional[datetime]], boundary: datetime) -> int:
    return sum(1 for d in dates if d is not None and start_of_day(d) >= boundary)


def average_processing_days(candidatures: Sequence[Candidature]) -> float:
    """Mean days between application and closing update for accepted/refused ones."""

    durations = [
        days_between(c.date_postulation, c.updated_at)
        for c in candidatures
        if normalize_status(c.statut) in CLOSED_STATUSES
        and c.date_postulation is not None
        and c.updated_at is not None
    ]
    if not durations:
        return 0
    return round(sum(durations) / len(durations), 2)


def compute_advanced_statistics(
    candidatures: Sequence[Candidature],
    candidates: Sequence[Candidate],
    *,
    now: Optional[datetime] = None,
    total_categories: int = settings.TOTAL_CATEGORIES,
) -> AdvancedStatistics:
    """Build the advanced statistics view-model from in-memory collections."""

    bounds = compute_period_boundaries(now or datetime.now())
    dates = [c.date_postulation for c in candidatures]
    total = len(candidatures)

    this_week = _count_since(dates, bounds.this_week)
    period_counts = PeriodCounts(
        today=_count_since(dates, bounds.today),
        this_week=this_week,
        this_month=_count_since(dates, bounds.this_month),
    )

    by_category = count_by(candidatures, lambda c: normalize_mission_type(c.type_de_mission))
    by_status = count_by(candidatures, lambda c: normalize_status(c.statut))
    by_location = count_by(candidates, lambda c: normalize_location(c.country))

    new_candidates = _count_since([c.created_at for c in candidates], bounds.six_months_ago)

    return AdvancedStatistics(
        global_=GlobalStatistics(
            total_candidates=len(candidates),
            total_categories=total_categories,
            candidatures_by_period=period_counts,
        ),
        by_category=[CategoryCount(**row) for row in breakdown(by_category, total, "name")],
        activity=ActivityStatistics(
            recent_candidatures=this_week,
            candidatures_by_hour=[
                HourCount(hour=hour, count=count)
                for hour, count in sorted(hourly_histogram(dates).items())
            ],
            new_vs_old_candidates=NewVsOld(
                new=new_candidates, old=len(candidates) - new_candidates
            ),
        ),
        tracking=TrackingStatistics(
            by_status=[StatusCount(**row) for row in breakdown(by_status, total, "status")],
            avg_processing_time_days=average_processing_days(candidatures),
        ),
        location=[
            LocationCount(location=location, count=count)
            for location, count in by_location.items()
        ],
    )


@dataclass(frozen=True)
class SyncStatistics:
    total_candidates: int
    total_cvs: int
    synced_cvs: int
    failed_syncs: int
    pending_syncs: int
    success_rate: float

    def to_dict(self) -> dict:
        data = asdict(self)
        return {
            "totalCandidates": data["total_candidates"],
            "totalCvs": data["total_cvs"],
            "syncedCvs": data["synced_cvs"],
            "failedSyncs": data["failed_syncs"],
            "pendingSyncs": data["pending_syncs"],
            "successRate": data["success_rate"],
        }


def compute_sync_statistics(candidates: Sequence[Candidate]) -> SyncStatistics:
    """CRM propagation counters over every candidate's CV history."""

    cvs = [cv for candidate in candidates for cv in candidate.cv_histories]
    by_status = count_by(cvs, lambda cv: cv.crm_sync_status)
    synced = by_status.get(CrmSyncStatus.SYNCED, 0)
    return SyncStatistics(
        total_candidates=len(candidates),
        total_cvs=len(cvs),
        synced_cvs=synced,
        failed_syncs=by_status.get(CrmSyncStatus.FAILED, 0),
        pending_syncs=by_status.get(CrmSyncStatus.PENDING, 0),
        success_rate=percentage(synced, len(cvs)),
    )


def count_normal_applications(candidatures: Sequence[Candidature]) -> int:
    return sum(1 for c in candidatures if c.candidate_source == PORTAL_REGISTRATION)


def _chart_days(period: str, today: datetime) -> List[datetime]:
    if period == MONTHLY_PERIOD:
        days_in_month = calendar.monthrange(today.year, today.month)[1]
        return [today.replace(day=day) for day in range(1, days_in_month + 1)]
    return [today - timedelta(days=offset) for offset in range(RECENT_DAYS - 1, -1, -1)]


def daily_gender_series(
    candidatures: Sequence[Candidature],
    period: str = MONTHLY_PERIOD,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """Per-day application counts split by gender for the dashboard chart.

    ``mensuelle`` covers every day of the current month; anything else covers
    the last ten days up to today.
    """

    today = start_of_day(now or datetime.now())
    points = {
        day.date(): {"name": str(day.day), "date": date_to_iso(day), "Femme": 0, "Homme": 0, "total": 0}
        for day in _chart_days(period, today)
    }

    for candidature in candidatures:
        if candidature.date_postulation is None:
            continue
        point = points.get(candidature.date_postulation.date())
        if point is None:
            continue
        point["total"] += 1
        gender = normalize_gender(candidature.candidate_gender)
        if gender == FEMALE:
            point["Femme"] += 1
        elif gender == MALE:
            point["Homme"] += 1

    return list(points.values())


# ---------------------------------------------------------------------------
# Repository-backed entry points
# ---------------------------------------------------------------------------

def _load(label: str, loader: Callable[[], list]) -> list:
    try:
        return loader()
    except Exception as exc:
        logger.warning("Could not load %s, using an empty collection: %s", label, exc)
        return []


def load_candidatures() -> List[Candidature]:
    return _load("candidatures", _candidature_repo.find_all_with_source)


def load_candidates() -> List[Candidate]:
    return _load("candidates", _candidate_repo.find_all)


def _total_categories() -> int:
    try:
        count = _category_repo.count()
    except Exception as exc:
        logger.warning("Could not count categories: %s", exc)
        return settings.TOTAL_CATEGORIES
    return count


def compute_local_statistics(now: Optional[datetime] = None) -> AdvancedStatistics:
    return compute_advanced_statistics(
        load_candidatures(),
        load_candidates(),
        now=now,
        total_categories=_total_categories(),
    )


def fetch_remote_statistics() -> Optional[AdvancedStatistics]:
    """Return the upstream aggregate when it is configured, non-empty and valid."""

    try:
        payload = _remote_client.fetch_advanced_statistics()
    except RemoteStatisticsError as exc:
        logger.warning("%s (%s), falling back to local statistics", exc.message, exc.details)
        return None

    if not payload:
        if _remote_client.enabled:
            logger.warning("Upstream returned empty statistics, falling back to local statistics")
        return None

    try:
        return AdvancedStatistics.model_validate(payload)
    except ValidationError as exc:
        logger.warning(
            "Upstream statistics failed validation (%d errors), falling back to local statistics",
            exc.error_count(),
        )
        return None


def get_advanced_statistics(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Prefer the upstream aggregate; otherwise compute locally."""

    remote = fetch_remote_statistics()
    if remote is not None:
        return {"source": "remote", "data": remote.to_dict()}
    return {"source": "local", "data": compute_local_statistics(now).to_dict()}


def get_sync_statistics() -> Dict[str, Any]:
    return compute_sync_statistics(load_candidates()).to_dict()


def get_weekly_overview(now: Optional[datetime] = None) -> Dict[str, Any]:
    candidatures = load_candidatures()
    messages = _load("contact messages", _contact_repo.find_all)
    return {
        "candidatures": compare_weeks(candidatures, "date_postulation", now).to_dict(),
        "contactMessages": compare_weeks(messages, "created_at", now).to_dict(),
        "normalApplications": count_normal_applications(candidatures),
    }


def get_daily_gender_series(period: str, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    return daily_gender_series(load_candidatures(), period, now)


__all__ = [
    "MONTHLY_PERIOD",
    "RECENT_PERIOD",
    "SyncStatistics",
    "average_processing_days",
    "compute_advanced_statistics",
    "compute_local_statistics",
    "compute_sync_statistics",
    "count_normal_applications",
    "daily_gender_series",
    "fetch_remote_statistics",
    "get_advanced_statistics",
    "get_daily_gender_series",
    "get_sync_statistics",
    "get_weekly_overview",
]
