"""
Filter/sort pipeline over entry lists.
"""
from almanac.dataclasses import Period

from .filters import (
    DateRange,
    FilterConfig,
    SortOrder,
    apply_filters,
    matches,
    period_start,
    sort_entries,
)

__all__ = [
    "DateRange",
    "FilterConfig",
    "Period",
    "SortOrder",
    "apply_filters",
    "matches",
    "period_start",
    "sort_entries",
]
