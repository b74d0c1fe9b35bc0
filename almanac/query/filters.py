#!/usr/bin/env python3
"""
filters.py
--------------------
Filter/sort pipeline over entry lists.

A FilterConfig bundles the user's current choices; every set criterion must
hold (AND). Relative periods resolve against `now` at query time, so the
same config yields a different window tomorrow. All functions are pure and
return new lists; applying the same config twice is a no-op.

Criteria:
    - period:     entry.date >= now - period.days (ALL disables it)
    - date_range: inclusive calendar-day range
    - category:   exact category name
    - search:     case-insensitive substring of the title or the note
    - emotions:   emotion entries whose emotion is in the set
    - kinds:      payload kinds to keep

Usage:
    config = FilterConfig(period=Period.WEEK, search="run")
    visible = apply_filters(store.entries.get_all(), config, SortOrder.DATE_DESC)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional

# --- Local imports ---
from almanac.core.exceptions import ValidationError
from almanac.core.validators import DataValidator
from almanac.dataclasses import EmotionType, Entry, EntryKind, Period


class SortOrder(str, Enum):
    """
    Orderings for the visible entry list.
    - DATE_DESC: newest first (default)
    - DATE_ASC: oldest first
    - TITLE_ASC / TITLE_DESC: by primary text, ignoring case
    - CATEGORY_ASC: by category name, uncategorized last
    """

    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"
    CATEGORY_ASC = "category_asc"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available sort order choices."""
        return [order.value for order in cls]


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive calendar-day range.

    Raises:
        ValidationError: If end is before start
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        start = DataValidator.normalize_date(self.start)
        end = DataValidator.normalize_date(self.end)
        if start is None or end is None:
            raise ValidationError("Date range needs both a start and an end")
        if end < start:
            raise ValidationError(f"Date range ends before it starts: {start} > {end}")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        """Number of calendar days covered."""
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class FilterConfig:
    """
    Current filter choices; unset fields do not filter.

    Attributes:
        period: Relative window ending now
        date_range: Absolute calendar-day window
        category: Exact category name
        search: Case-insensitive text in title or note
        emotions: Emotions to keep; empty keeps everything
        kinds: Entry kinds to keep; empty keeps everything
    """

    period: Optional[Period] = None
    date_range: Optional[DateRange] = None
    category: Optional[str] = None
    search: Optional[str] = None
    emotions: FrozenSet[EmotionType] = field(default_factory=frozenset)
    kinds: FrozenSet[EntryKind] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "emotions", frozenset(EmotionType(e) for e in self.emotions))
        object.__setattr__(self, "kinds", frozenset(EntryKind(k) for k in self.kinds))
        if self.period is not None:
            object.__setattr__(self, "period", Period(self.period))

    @property
    def is_empty(self) -> bool:
        return (
            (self.period is None or self.period is Period.ALL)
            and self.date_range is None
            and not self.category
            and not (self.search or "").strip()
            and not self.emotions
            and not self.kinds
        )


def period_start(period: Optional[Period], now: datetime) -> Optional[datetime]:
    """Earliest datetime inside `period` ending at `now` (None for no window)."""
    if period is None or period.days is None:
        return None
    return now - timedelta(days=period.days)


def matches(entry: Entry, config: FilterConfig, now: Optional[datetime] = None) -> bool:
    """
    Check one entry against every set criterion.

    Args:
        entry: Entry to test
        config: Filter choices
        now: Reference time for relative periods (default: current time)
    """
    cutoff = period_start(config.period, now or datetime.now())
    if cutoff is not None and entry.date < cutoff:
        return False

    if config.date_range is not None and not config.date_range.contains(entry.day):
        return False

    if config.category and entry.category != config.category:
        return False

    needle = (config.search or "").strip().casefold()
    if needle:
        haystacks = (entry.title, entry.note or "")
        if not any(needle in text.casefold() for text in haystacks):
            return False

    if config.emotions and entry.emotion not in config.emotions:
        return False

    if config.kinds and entry.kind not in config.kinds:
        return False

    return True


def sort_entries(entries: Iterable[Entry], order: SortOrder = SortOrder.DATE_DESC) -> List[Entry]:
    """
    Stable sort; entries that compare equal keep their input order.

    Raises:
        ValueError: If the order is unknown
    """
    order = SortOrder(order)
    items = list(entries)
    if order is SortOrder.DATE_DESC:
        return sorted(items, key=lambda e: e.date, reverse=True)
    if order is SortOrder.DATE_ASC:
        return sorted(items, key=lambda e: e.date)
    if order is SortOrder.TITLE_ASC:
        return sorted(items, key=lambda e: e.title.casefold())
    if order is SortOrder.TITLE_DESC:
        return sorted(items, key=lambda e: e.title.casefold(), reverse=True)
    # CATEGORY_ASC
    return sorted(
        items, key=lambda e: (e.category is None, (e.category or "").casefold())
    )


def apply_filters(
    entries: Iterable[Entry],
    config: Optional[FilterConfig] = None,
    sort: Optional[SortOrder] = None,
    now: Optional[datetime] = None,
) -> List[Entry]:
    """
    Filter entries and optionally sort the result.

    Args:
        entries: Source entries (not modified)
        config: Filter choices; None keeps everything
        sort: Optional ordering; None keeps input order
        now: Reference time for relative periods

    Returns:
        New list of matching entries
    """
    config = config or FilterConfig()
    now = now or datetime.now()
    visible = [entry for entry in entries if matches(entry, config, now)]
    return sort_entries(visible, sort) if sort is not None else visible
