"""
Counting helpers over entry lists.

Windows are half-open on the left: an entry belongs to the last `days` days
when `entry.date >= now - timedelta(days=days)`.
"""
from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Any, Callable, Hashable, Iterable, List, Optional, Sequence, Tuple

from almanac.dataclasses import Entry


def total_count(entries: Sequence[Entry]) -> int:
    return len(entries)


def entries_in_period(
    entries: Iterable[Entry], days: Optional[int], now: Optional[datetime] = None
) -> List[Entry]:
    """Entries dated within the last `days` days (all entries for None)."""
    if days is None:
        return list(entries)
    cutoff = (now or datetime.now()) - timedelta(days=days)
    return [entry for entry in entries if entry.date >= cutoff]


def count_in_period(
    entries: Iterable[Entry], days: Optional[int], now: Optional[datetime] = None
) -> int:
    return len(entries_in_period(entries, days, now))


def entries_per_day(entries: Iterable[Entry]) -> Counter:
    """Counter of calendar day -> number of entries."""
    return Counter(entry.day for entry in entries)


def unique_days(entries: Iterable[Entry]) -> List[date]:
    """Distinct calendar days with at least one entry, oldest first."""
    return sorted({entry.day for entry in entries})


def best_day(entries: Iterable[Entry]) -> Optional[Tuple[date, int]]:
    """
    Day with the most entries.

    Returns:
        (day, count), or None for no entries. Ties go to the earliest day.
    """
    per_day = entries_per_day(entries)
    if not per_day:
        return None
    day = min(per_day, key=lambda d: (-per_day[d], d))
    return day, per_day[day]


def average_per_day(entries: Sequence[Entry], days: Optional[int]) -> float:
    """
    Mean entries per day over a `days`-long window.

    For `days=None` the window is the span from the first to the last entry
    day, inclusive. Returns 0.0 when there is nothing to divide by.
    """
    if days is None:
        distinct = unique_days(entries)
        days = (distinct[-1] - distinct[0]).days + 1 if distinct else 0
    if days <= 0:
        return 0.0
    return len(entries) / days


def most_common(
    entries: Iterable[Entry], key: Callable[[Entry], Optional[Hashable]]
) -> Optional[Tuple[Any, int]]:
    """
    Most frequent non-None value of `key` over the entries.

    Ties go to the value seen first.

    Returns:
        (value, count), or None if no entry has a value
    """
    counts = Counter(value for value in map(key, entries) if value is not None)
    if not counts:
        return None
    return counts.most_common(1)[0]
