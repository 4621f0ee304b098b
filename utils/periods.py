"""Relative period boundaries used to bucket dashboard records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from utils.dates import months_back, start_of_day


@dataclass(frozen=True)
class PeriodBoundaries:
    """Local-midnight instants marking the start of each dashboard period."""

    today: datetime
    this_week: datetime
    this_month: datetime
    six_months_ago: datetime


def compute_period_boundaries(now: datetime) -> PeriodBoundaries:
    """Return the today / last 7 days / last month / last 6 months boundaries."""

    today = start_of_day(now)
    return PeriodBoundaries(
        today=today,
        this_week=start_of_day(today - timedelta(days=7)),
        this_month=start_of_day(months_back(today, 1)),
        six_months_ago=start_of_day(months_back(today, 6)),
    )


__all__ = ["PeriodBoundaries", "compute_period_boundaries"]
