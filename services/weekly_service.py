"""This-week versus last-week comparison for dated records.

Weeks run Monday 00:00:00 through Sunday 23:59:59.999999 local time. Records
whose date is missing or unparseable are left out of both counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional, Tuple

from utils.dates import coerce_datetime, end_of_day, start_of_day

Window = Tuple[datetime, datetime]


@dataclass(frozen=True)
class WeeklyStats:
    this_week: int
    last_week: int
    variation: str
    is_positive: bool

    def to_dict(self) -> dict:
        return {
            "thisWeek": self.this_week,
            "lastWeek": self.last_week,
            "variation": self.variation,
            "isPositive": self.is_positive,
        }


def week_windows(now: datetime) -> Tuple[Window, Window]:
    """Return ``(this_week, last_week)`` as inclusive ``(start, end)`` pairs."""

    today = start_of_day(now)
    start_this = today - timedelta(days=today.weekday())
    end_this = end_of_day(start_this + timedelta(days=6))
    start_last = start_this - timedelta(days=7)
    end_last = end_of_day(start_this - timedelta(days=1))
    return (start_this, end_this), (start_last, end_last)


def variation_percent(this_week: int, last_week: int) -> float:
    if last_week > 0:
        return (this_week - last_week) / last_week * 100
    if this_week > 0:
        return 100.0
    return 0.0


def format_variation(variation: float) -> str:
    """One decimal, explicit ``+`` for increases, ``0.0`` when flat."""

    if variation > 0:
        return f"+{variation:.1f}"
    if variation < 0:
        return f"{variation:.1f}"
    return "0.0"


def _read_field(item: Any, field: str) -> Any:
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)


def _in_window(value: Optional[datetime], window: Window) -> bool:
    return value is not None and window[0] <= value <= window[1]


def compare_weeks(
    items: Iterable[Any], date_field: str, now: Optional[datetime] = None
) -> WeeklyStats:
    """Count ``items`` per week on ``date_field`` and derive the variation.

    ``items`` may be models or plain dicts; ``date_field`` is read as an
    attribute or a key accordingly.
    """

    this_window, last_window = week_windows(now or datetime.now())
    this_week = last_week = 0
    for item in items:
        value = coerce_datetime(_read_field(item, date_field))
        if _in_window(value, this_window):
            this_week += 1
        elif _in_window(value, last_window):
            last_week += 1

    variation = variation_percent(this_week, last_week)
    return WeeklyStats(
        this_week=this_week,
        last_week=last_week,
        variation=format_variation(variation),
        is_positive=variation >= 0,
    )


__all__ = ["WeeklyStats", "compare_weeks", "format_variation", "variation_percent", "week_windows"]
