"""
Journal dataclasses: entries, payload variants, categories and enums.
"""
from .enums import EmotionType, EntryKind, Period, StreakPolicy
from .entry import (
    PAYLOAD_TYPES,
    EmotionPayload,
    Entry,
    MatchPayload,
    Payload,
    VictoryPayload,
    WordPayload,
    coerce_datetime,
    new_id,
    payload_from_dict,
)
from .category import Category

__all__ = [
    "EmotionType",
    "EntryKind",
    "Period",
    "StreakPolicy",
    "PAYLOAD_TYPES",
    "EmotionPayload",
    "Entry",
    "MatchPayload",
    "Payload",
    "VictoryPayload",
    "WordPayload",
    "coerce_datetime",
    "new_id",
    "payload_from_dict",
    "Category",
]
