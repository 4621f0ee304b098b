"""Small folds used to build dashboard breakdowns.

Every helper here is pure: inputs are never mutated and absent keys land in
whatever default bucket the key function chooses.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

HOURS_PER_DAY = 24


def count_by(items: Iterable[T], key: Callable[[T], K]) -> Dict[K, int]:
    """Count items per derived key, keeping first-seen key order."""

    return dict(Counter(key(item) for item in items))


def hourly_histogram(timestamps: Iterable[Optional[datetime]]) -> Dict[int, int]:
    """Count timestamps per local hour; all 24 hours are always present."""

    histogram = {hour: 0 for hour in range(HOURS_PER_DAY)}
    for ts in timestamps:
        if ts is not None:
            histogram[ts.hour] += 1
    return histogram


def percentage(count: int, total: int) -> float:
    """``count / total`` as a percentage rounded to two decimals; 0 for empty totals."""

    if total <= 0:
        return 0
    return round(count / total * 100, 2)


def breakdown(counts: Dict[K, int], total: int, label: str = "name") -> List[dict]:
    """Render ``{label: key, count, percentage}`` rows in bucket order."""

    return [
        {label: key, "count": count, "percentage": percentage(count, total)}
        for key, count in counts.items()
    ]


__all__ = ["HOURS_PER_DAY", "breakdown", "count_by", "hourly_histogram", "percentage"]
