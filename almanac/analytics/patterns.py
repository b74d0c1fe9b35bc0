"""
Distribution patterns: weekday, time of day, category, emotion and match
results.

Weekdays are numbered 1-7 starting on Sunday (1 = Sunday, 2 = Monday, ...,
7 = Saturday). Time-of-day slots cover the hour of the entry:

    Night      0-5
    Morning    6-11
    Afternoon  12-17
    Evening    18-23

Every percentage is count / total * 100, and 0 when the total is 0.
"""
from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from almanac.dataclasses import EmotionType, Entry, MatchPayload

UNCATEGORIZED = "Uncategorized"

WEEKDAY_NAMES = {
    1: "Sunday",
    2: "Monday",
    3: "Tuesday",
    4: "Wednesday",
    5: "Thursday",
    6: "Friday",
    7: "Saturday",
}

TIME_SLOTS = (
    ("night", "Night", range(0, 6)),
    ("morning", "Morning", range(6, 12)),
    ("afternoon", "Afternoon", range(12, 18)),
    ("evening", "Evening", range(18, 24)),
)

MATCH_RESULTS = (
    ("home", "Home wins"),
    ("away", "Away wins"),
    ("draw", "Draws"),
)


@dataclass(frozen=True)
class Bucket:
    """One histogram bar."""

    key: Any
    label: str
    count: int
    percentage: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if isinstance(self.key, EmotionType):
            data["key"] = self.key.value
        return data


@dataclass(frozen=True)
class CategoryShare:
    """Share of entries in one category."""

    name: str
    count: int
    percentage: float
    average_per_day: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WeekdayPattern:
    """Dominant emotion recorded on one weekday."""

    weekday: int
    day_name: str
    emotion: EmotionType
    count: int
    confidence: float

    @property
    def description(self) -> str:
        return f"You often feel {self.emotion.value} on {self.day_name}s"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekday": self.weekday,
            "day_name": self.day_name,
            "emotion": self.emotion.value,
            "count": self.count,
            "confidence": self.confidence,
            "description": self.description,
        }


def percentage(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def weekday_number(day: date) -> int:
    """Weekday of `day` with 1 = Sunday ... 7 = Saturday."""
    return day.isoweekday() % 7 + 1


def time_slot(hour: int) -> str:
    for key, _, hours in TIME_SLOTS:
        if hour in hours:
            return key
    raise ValueError(f"Hour out of range: {hour}")


def day_of_week_histogram(entries: Sequence[Entry]) -> List[Bucket]:
    """Seven buckets, Sunday first, including empty days."""
    counts = Counter(weekday_number(entry.day) for entry in entries)
    total = len(entries)
    return [
        Bucket(number, name, counts[number], percentage(counts[number], total))
        for number, name in WEEKDAY_NAMES.items()
    ]


def time_of_day_histogram(entries: Sequence[Entry]) -> List[Bucket]:
    """Four buckets, Night first, including empty slots."""
    counts = Counter(time_slot(entry.hour) for entry in entries)
    total = len(entries)
    return [
        Bucket(key, label, counts[key], percentage(counts[key], total))
        for key, label, _ in TIME_SLOTS
    ]


def category_breakdown(
    entries: Sequence[Entry], days: Optional[int] = None
) -> List[CategoryShare]:
    """
    Entries grouped by category, most used first.

    Entries without a category group under "Uncategorized". Equal counts are
    ordered by name.

    Args:
        entries: Entries to group
        days: Window length for the per-day average; None uses the span of
            the entries' days
    """
    counts = Counter(entry.category or UNCATEGORIZED for entry in entries)
    total = len(entries)

    if days is None and entries:
        distinct = sorted({entry.day for entry in entries})
        days = (distinct[-1] - distinct[0]).days + 1

    shares = [
        CategoryShare(
            name=name,
            count=count,
            percentage=percentage(count, total),
            average_per_day=count / days if days else 0.0,
        )
        for name, count in counts.items()
    ]
    return sorted(shares, key=lambda share: (-share.count, share.name.casefold()))


def top_categories(
    entries: Sequence[Entry], n: int = 5, days: Optional[int] = None
) -> List[CategoryShare]:
    return category_breakdown(entries, days=days)[:n]


def emotion_breakdown(entries: Sequence[Entry]) -> List[Bucket]:
    """
    Emotion entries grouped by emotion, most frequent first.

    Percentages are relative to the emotion entries only; equal counts keep
    the EmotionType order.
    """
    emotions = [entry.emotion for entry in entries if entry.emotion is not None]
    counts = Counter(emotions)
    total = len(emotions)
    order = list(EmotionType)
    buckets = [
        Bucket(emotion, emotion.display_name, counts[emotion], percentage(counts[emotion], total))
        for emotion in order
        if counts[emotion]
    ]
    return sorted(buckets, key=lambda b: (-b.count, order.index(b.key)))


def day_of_week_patterns(entries: Sequence[Entry], min_count: int = 2) -> List[WeekdayPattern]:
    """
    Dominant emotion for each weekday that has one.

    A weekday qualifies when its most frequent emotion occurs at least
    `min_count` times; confidence is that count over the weekday's emotion
    entries. Equal counts keep the EmotionType order.
    """
    by_weekday: Dict[int, List[EmotionType]] = defaultdict(list)
    for entry in entries:
        if entry.emotion is not None:
            by_weekday[weekday_number(entry.day)].append(entry.emotion)

    order = list(EmotionType)
    patterns = []
    for weekday in sorted(by_weekday):
        emotions = by_weekday[weekday]
        counts = Counter(emotions)
        emotion = min(counts, key=lambda e: (-counts[e], order.index(e)))
        if counts[emotion] >= min_count:
            patterns.append(
                WeekdayPattern(
                    weekday=weekday,
                    day_name=WEEKDAY_NAMES[weekday],
                    emotion=emotion,
                    count=counts[emotion],
                    confidence=counts[emotion] / len(emotions),
                )
            )
    return patterns


def match_results(entries: Sequence[Entry]) -> List[Bucket]:
    """
    Match outcomes from the home team's side: home wins, away wins, draws.

    Percentages are relative to the match entries only; all three buckets
    are returned even when empty.
    """
    outcomes = Counter(
        entry.payload.result for entry in entries if isinstance(entry.payload, MatchPayload)
    )
    total = sum(outcomes.values())
    return [
        Bucket(key, label, outcomes[key], percentage(outcomes[key], total))
        for key, label in MATCH_RESULTS
    ]


def mvp_frequency(entries: Sequence[Entry]) -> List[Bucket]:
    """
    Players ranked by MVP awards, most awarded first.

    Matches without an MVP are skipped. Percentages are relative to the
    matches that name one; equal counts are ordered by name.
    """
    names = [
        entry.payload.mvp
        for entry in entries
        if isinstance(entry.payload, MatchPayload) and entry.payload.mvp
    ]
    counts = Counter(names)
    buckets = [
        Bucket(name, name, count, percentage(count, len(names)))
        for name, count in counts.items()
    ]
    return sorted(buckets, key=lambda b: (-b.count, b.label.casefold()))


def compute_histograms(
    entries: Sequence[Entry], top_n: int = 5, days: Optional[int] = None
) -> Dict[str, Any]:
    """
    Every distribution over a plain entry list.

    Returns:
        Dictionary with keys "day_of_week", "time_of_day", "categories",
        "top_categories", "emotions", "weekday_patterns", "match_results"
        and "mvp_frequency"
    """
    categories = category_breakdown(entries, days=days)
    return {
        "day_of_week": day_of_week_histogram(entries),
        "time_of_day": time_of_day_histogram(entries),
        "categories": categories,
        "top_categories": categories[:top_n],
        "emotions": emotion_breakdown(entries),
        "weekday_patterns": day_of_week_patterns(entries),
        "match_results": match_results(entries),
        "mvp_frequency": mvp_frequency(entries),
    }
