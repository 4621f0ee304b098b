"""Utility helpers for working with date-like values."""

from __future__ import annotations

import re
from datetime import date as date_cls
from datetime import datetime, timedelta
from typing import Optional

import pandas as pd

_DATE_PATTERNS = {
    "ymd": re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$"),
    "dmy": re.compile(r"^\d{1,2}\.\d{1,2}\.\d{4}$"),
    "mdy": re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"),
}


def _is_missing_value(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # list-like values make pd.isna return an array
        return False


def _parse_date_string(value: str) -> Optional[datetime]:
    text = value.strip()
    if not text:
        return None
    try:
        if _DATE_PATTERNS["ymd"].match(text):
            return datetime.strptime(text, "%Y-%m-%d")
        if _DATE_PATTERNS["dmy"].match(text):
            return datetime.strptime(text, "%d.%m.%Y")
        if _DATE_PATTERNS["mdy"].match(text):
            return datetime.strptime(text, "%m/%d/%Y")
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""

    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def coerce_datetime(value: object) -> Optional[datetime]:
    """
    Best-effort coercion of ``value`` into a naive local ``datetime``.

    Accepts ``datetime``/``date`` objects, pandas ``Timestamp`` values and
    strings (ISO 8601, ``YYYY-MM-DD``, ``DD.MM.YYYY``, ``MM/DD/YYYY``).
    Timezone-aware values are converted to local time. Anything missing or
    unparseable returns ``None``.
    """

    if _is_missing_value(value):
        return None

    if isinstance(value, pd.Timestamp):
        return to_local_naive(value.to_pydatetime())

    if isinstance(value, datetime):
        return to_local_naive(value)

    if isinstance(value, date_cls):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, str):
        parsed = _parse_date_string(value)
        return to_local_naive(parsed) if parsed else None

    return None


def start_of_day(value: datetime) -> datetime:
    """Truncate to local midnight."""

    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def months_back(value: datetime, months: int) -> datetime:
    """Move ``value`` back by calendar months, clamping to the month's last day."""

    shifted = pd.Timestamp(value) - pd.DateOffset(months=months)
    return shifted.to_pydatetime()


def days_between(start: datetime, end: datetime) -> float:
    return (end - start) / timedelta(days=1)


def date_to_iso(value: object) -> Optional[str]:
    """Return ``YYYY-MM-DD`` for a date-like value or ``None``."""

    dt = coerce_datetime(value)
    return dt.date().isoformat() if dt else None


__all__ = [
    "coerce_datetime",
    "date_to_iso",
    "days_between",
    "end_of_day",
    "months_back",
    "start_of_day",
    "to_local_naive",
]
