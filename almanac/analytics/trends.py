"""
Trend classification.

Each trend compares a recent window with the window just before it:

    mood_trend       mean mood weight, recent 7 days vs the 7 before;
                     |change| <= 0.10 is stable
    frequency_trend  relative change in entry count over the same windows;
                     |change| <= 0.20 is stable
    count_trend      entries in the recent half of a period vs the older
                     half; any difference counts

Windows split at `now - period_days / 2`; recent entries satisfy
`date >= midpoint`, earlier ones `start <= date < midpoint`.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from almanac.dataclasses import Entry

from .patterns import UNCATEGORIZED

MOOD_DEAD_BAND = 0.10
FREQUENCY_DEAD_BAND = 0.20
TREND_PERIOD_DAYS = 14


class TrendDirection(str, Enum):
    """Direction of a trend."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"

    @classmethod
    def classify(cls, change: float, dead_band: float = 0.0) -> "TrendDirection":
        if change > dead_band:
            return cls.IMPROVING
        if change < -dead_band:
            return cls.DECLINING
        return cls.STABLE


@dataclass(frozen=True)
class Trend:
    """
    Classified comparison of two windows.

    Attributes:
        direction: Improving, declining or stable
        change: Raw change (absolute for mood, relative for frequency,
            count difference for counts)
        recent: Metric over the recent window
        previous: Metric over the earlier window
    """

    direction: TrendDirection
    change: float
    recent: float
    previous: float

    @property
    def change_percentage(self) -> float:
        return abs(self.change) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "change": self.change,
            "change_percentage": self.change_percentage,
            "recent": self.recent,
            "previous": self.previous,
        }


@dataclass(frozen=True)
class WeeklyCount:
    """Entries in one week, keyed by its Monday."""

    week_start: date
    count: int
    categories: FrozenSet[str] = field(default_factory=frozenset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_start": self.week_start.isoformat(),
            "count": self.count,
            "categories": sorted(self.categories),
        }


@dataclass(frozen=True)
class CategoryTrend:
    """Weekly counts of one category."""

    name: str
    total_count: int
    weekly_counts: Dict[date, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "total_count": self.total_count,
            "weekly_counts": {k.isoformat(): v for k, v in sorted(self.weekly_counts.items())},
        }


def week_start(day: date) -> date:
    """Monday of the ISO week containing `day`."""
    return day - timedelta(days=day.weekday())


def split_halves(
    entries: Sequence[Entry], now: datetime, period_days: int = TREND_PERIOD_DAYS
) -> Tuple[List[Entry], List[Entry]]:
    """
    Split the last `period_days` days at their midpoint.

    Returns:
        (recent, earlier)
    """
    midpoint = now - timedelta(days=period_days / 2)
    start = now - timedelta(days=period_days)
    recent = [entry for entry in entries if entry.date >= midpoint]
    earlier = [entry for entry in entries if start <= entry.date < midpoint]
    return recent, earlier


def weekly_counts(entries: Sequence[Entry]) -> List[WeeklyCount]:
    """Entries per ISO week (Monday start), oldest week first."""
    counts: Dict[date, int] = defaultdict(int)
    categories: Dict[date, set] = defaultdict(set)
    for entry in entries:
        start = week_start(entry.day)
        counts[start] += 1
        if entry.category:
            categories[start].add(entry.category)
    return [
        WeeklyCount(start, counts[start], frozenset(categories[start]))
        for start in sorted(counts)
    ]


def category_trends(entries: Sequence[Entry]) -> List[CategoryTrend]:
    """Per-category weekly counts, most used category first."""
    grouped: Dict[str, Dict[date, int]] = defaultdict(lambda: defaultdict(int))
    for entry in entries:
        grouped[entry.category or UNCATEGORIZED][week_start(entry.day)] += 1
    trends = [
        CategoryTrend(name, sum(weeks.values()), dict(weeks))
        for name, weeks in grouped.items()
    ]
    return sorted(trends, key=lambda t: (-t.total_count, t.name.casefold()))


def mood_score(entries: Sequence[Entry]) -> float:
    """Mean mood weight of the emotion entries, 0.0 when there are none."""
    weights = [entry.emotion.weight for entry in entries if entry.emotion is not None]
    return sum(weights) / len(weights) if weights else 0.0


def mood_trend(
    entries: Sequence[Entry],
    now: Optional[datetime] = None,
    period_days: int = TREND_PERIOD_DAYS,
) -> Optional[Trend]:
    """
    Compare the mood score of the two halves of the window.

    Returns:
        Trend, or None if either half holds no emotion entry
    """
    emotional = [entry for entry in entries if entry.emotion is not None]
    recent, earlier = split_halves(emotional, now or datetime.now(), period_days)
    if not recent or not earlier:
        return None

    recent_score, earlier_score = mood_score(recent), mood_score(earlier)
    change = recent_score - earlier_score
    return Trend(
        TrendDirection.classify(change, MOOD_DEAD_BAND), change, recent_score, earlier_score
    )


def frequency_trend(
    entries: Sequence[Entry],
    now: Optional[datetime] = None,
    period_days: int = TREND_PERIOD_DAYS,
) -> Optional[Trend]:
    """
    Relative change in entry count between the two halves of the window.

    Returns:
        Trend, or None if the earlier half is empty
    """
    recent, earlier = split_halves(entries, now or datetime.now(), period_days)
    if not earlier:
        return None

    change = (len(recent) - len(earlier)) / len(earlier)
    return Trend(
        TrendDirection.classify(change, FREQUENCY_DEAD_BAND),
        change,
        float(len(recent)),
        float(len(earlier)),
    )


def count_trend(
    entries: Sequence[Entry], period_days: int, now: Optional[datetime] = None
) -> Optional[Trend]:
    """
    Compare entry counts in the recent and older halves of a period.

    Entries outside the period are ignored.

    Returns:
        Trend, or None when the period holds fewer than 2 entries
    """
    recent, earlier = split_halves(entries, now or datetime.now(), period_days)
    if len(recent) + len(earlier) < 2:
        return None

    change = float(len(recent) - len(earlier))
    return Trend(TrendDirection.classify(change), change, float(len(recent)), float(len(earlier)))
