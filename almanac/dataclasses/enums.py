"""
Enumeration Types
------------------

Enum classes shared by the journal dataclasses.

Enums:
    - EntryKind: Which tracker variant an entry belongs to
    - EmotionType: Emotions recorded by the daily-emotion tracker, each with
      a fixed mood weight in [0, 1]

These enums are `str` subclasses so they serialize to plain strings in YAML,
JSON and SQLite without custom encoders.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List, Optional


class EntryKind(str, Enum):
    """
    Enumeration of entry payload kinds.
    - EMOTION: Daily emotion with a reason
    - VICTORY: A small win with a title
    - WORD: A rare word with its definition
    - MATCH: A match result between two teams
    """

    EMOTION = "emotion"
    VICTORY = "victory"
    WORD = "word"
    MATCH = "match"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available entry kind choices."""
        return [kind.value for kind in cls]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        display_map = {
            self.EMOTION: "Emotion",
            self.VICTORY: "Victory",
            self.WORD: "Word",
            self.MATCH: "Match",
        }
        return display_map.get(self, self.value.title())


class EmotionType(str, Enum):
    """
    Enumeration of tracked emotions.

    Each emotion maps to a fixed mood weight used by the mood score:
    joy=1.0, success=0.9, calm=0.7, bored=0.4, tired=0.3, angry=0.1
    """

    JOY = "joy"
    SUCCESS = "success"
    CALM = "calm"
    BORED = "bored"
    TIRED = "tired"
    ANGRY = "angry"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available emotion choices."""
        return [emotion.value for emotion in cls]

    @property
    def weight(self) -> float:
        """Mood weight in [0, 1]."""
        return _MOOD_WEIGHTS[self]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.title()


_MOOD_WEIGHTS = {
    EmotionType.JOY: 1.0,
    EmotionType.SUCCESS: 0.9,
    EmotionType.CALM: 0.7,
    EmotionType.BORED: 0.4,
    EmotionType.TIRED: 0.3,
    EmotionType.ANGRY: 0.1,
}


class StreakPolicy(str, Enum):
    """
    How the current streak treats a most recent entry day in the past.
    - ANCHORED: The streak is the run ending at the most recent entry day,
      however long ago that was
    - CURRENT: The streak is 0 unless the most recent entry day is today or
      yesterday
    """

    ANCHORED = "anchored"
    CURRENT = "current"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available streak policy choices."""
        return [policy.value for policy in cls]


class Period(str, Enum):
    """
    Named relative time windows, resolved against "now" at query time.
    - WEEK: last 7 days
    - MONTH: last 30 days
    - QUARTER: last 90 days
    - YEAR: last 365 days
    - ALL: no window
    """

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    ALL = "all"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available period choices."""
        return [period.value for period in cls]

    @property
    def days(self) -> Optional[int]:
        """Window length in days, None for ALL."""
        return _PERIOD_DAYS[self]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return "All time" if self is Period.ALL else self.value.title()


_PERIOD_DAYS = {
    Period.WEEK: 7,
    Period.MONTH: 30,
    Period.QUARTER: 90,
    Period.YEAR: 365,
    Period.ALL: None,
}
