"""
Streak detection.

A streak is a run of consecutive calendar days that each hold at least one
entry. Several entries on one day count once.

    - current_streak: run ending at the most recent entry day
    - longest_streak: longest run anywhere in the history

StreakPolicy decides what "current" means when the most recent entry day is
in the past:

    ANCHORED  the run ending at the most recent entry day, however old
    CURRENT   0 unless the most recent entry day is today or yesterday
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from almanac.dataclasses import Entry, StreakPolicy


def _distinct_days_desc(entries: Iterable[Entry]) -> List[date]:
    return sorted({entry.day for entry in entries}, reverse=True)


def current_streak(
    entries: Iterable[Entry],
    today: Optional[date] = None,
    policy: StreakPolicy = StreakPolicy.ANCHORED,
) -> int:
    """
    Length of the run of consecutive days ending at the most recent entry day.

    Args:
        entries: Entries to scan
        today: Reference day for the CURRENT policy (default: today)
        policy: How to treat a most recent entry day in the past

    Returns:
        Number of days in the run, 0 for no entries
    """
    days = _distinct_days_desc(entries)
    if not days:
        return 0

    if StreakPolicy(policy) is StreakPolicy.CURRENT:
        today = today or date.today()
        if (today - days[0]).days > 1:
            return 0

    streak = 1
    for previous, current in zip(days, days[1:]):
        if previous - current != timedelta(days=1):
            break
        streak += 1
    return streak


def longest_streak(entries: Iterable[Entry]) -> int:
    """Longest run of consecutive entry days anywhere in the history."""
    days = sorted({entry.day for entry in entries})
    if not days:
        return 0

    longest = run = 1
    for previous, current in zip(days, days[1:]):
        run = run + 1 if current - previous == timedelta(days=1) else 1
        longest = max(longest, run)
    return longest


def compute_streak(
    entries: Iterable[Entry],
    today: Optional[date] = None,
    policy: StreakPolicy = StreakPolicy.ANCHORED,
) -> int:
    """Current streak of a plain entry list."""
    return current_streak(entries, today=today, policy=policy)
