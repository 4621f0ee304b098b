"""View-model returned by the advanced statistics endpoint.

The same models validate payloads coming from the upstream recruitment API,
so a remote aggregate and a locally computed one serialize identically.
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from domain.models.common import DashboardModel


class PeriodCounts(DashboardModel):
    today: int = 0
    this_week: int = 0
    this_month: int = 0


class GlobalStatistics(DashboardModel):
    total_candidates: int = 0
    total_categories: int = 0
    candidatures_by_period: PeriodCounts = Field(default_factory=PeriodCounts)


class CategoryCount(DashboardModel):
    name: str
    count: int
    percentage: float = 0


class HourCount(DashboardModel):
    hour: int = Field(ge=0, le=23)
    count: int = 0


class NewVsOld(DashboardModel):
    new: int = 0
    old: int = 0


class ActivityStatistics(DashboardModel):
    recent_candidatures: int = 0
    candidatures_by_hour: List[HourCount] = Field(default_factory=list)
    new_vs_old_candidates: NewVsOld = Field(default_factory=NewVsOld)


class StatusCount(DashboardModel):
    status: str
    count: int
    percentage: float = 0


class TrackingStatistics(DashboardModel):
    by_status: List[StatusCount] = Field(default_factory=list)
    avg_processing_time_days: float = 0


class LocationCount(DashboardModel):
    location: str
    count: int


class AdvancedStatistics(DashboardModel):
    global_: GlobalStatistics = Field(alias="global")
    by_category: List[CategoryCount]
    activity: ActivityStatistics
    tracking: TrackingStatistics
    location: List[LocationCount]


__all__ = [
    "ActivityStatistics",
    "AdvancedStatistics",
    "CategoryCount",
    "GlobalStatistics",
    "HourCount",
    "LocationCount",
    "NewVsOld",
    "PeriodCounts",
    "StatusCount",
    "TrackingStatistics",
]
