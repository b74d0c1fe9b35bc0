#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for Almanac.

DataValidator holds the type-safe conversions shared by the CLI, the config
layer and the submit step. EntryValidator applies the per-variant business
rules an entry must satisfy before it may reach the store.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from almanac.dataclasses import (
    EmotionPayload,
    EmotionType,
    Entry,
    MatchPayload,
    VictoryPayload,
    WordPayload,
)

from .exceptions import ValidationError


class DataValidator:
    """Centralized data validation for journal input."""

    @staticmethod
    def validate_required_text(value: Any, field: str) -> str:
        """
        Validate that a text field is present and non-blank.

        Args:
            value: Raw field value
            field: Field name for the error message

        Returns:
            The stripped text

        Raises:
            ValidationError: If the value is missing, not text, or blank
        """
        text = DataValidator.normalize_string(value)
        if not text:
            raise ValidationError(f"Required field '{field}' missing or empty")
        return text

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Args:
            value: Value to normalize

        Returns:
            Stripped string, or None for None/blank/non-string input
        """
        if not isinstance(value, str):
            return None
        stripped = value.strip()
        return stripped or None

    @staticmethod
    def normalize_date(date_value: Any) -> Optional[date]:
        """
        Normalize various date inputs to date object.

        Args:
            date_value: ISO date string, date object, or datetime

        Returns:
            Normalized date object or None

        Raises:
            ValidationError: If a string cannot be parsed
        """
        if isinstance(date_value, datetime):
            return date_value.date()
        if isinstance(date_value, date):
            return date_value
        if isinstance(date_value, str):
            try:
                return date.fromisoformat(date_value.strip())
            except ValueError:
                raise ValidationError(
                    f"Invalid date format: {date_value!r} (expected YYYY-MM-DD)"
                )
        return None

    @staticmethod
    def normalize_datetime(value: Any) -> Optional[datetime]:
        """
        Normalize date/time input to a naive datetime.

        Accepts datetimes, dates (midnight) and ISO strings with or without
        a time part.

        Raises:
            ValidationError: If a string cannot be parsed
        """
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, datetime.min.time())
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.strip())
            except ValueError:
                raise ValidationError(
                    f"Invalid date/time: {value!r} (expected YYYY-MM-DD[THH:MM])"
                )
        return None

    @staticmethod
    def normalize_score(value: Any, field: str = "score") -> int:
        """
        Convert a match score to a non-negative integer.

        Raises:
            ValidationError: If the value is not an integer or is negative
        """
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be a non-negative integer: {value!r}")
        try:
            score = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field} must be a non-negative integer: {value!r}")
        if isinstance(value, float) and value != score:
            raise ValidationError(f"{field} must be a non-negative integer: {value!r}")
        if score < 0:
            raise ValidationError(f"{field} must be a non-negative integer: {value!r}")
        return score


class EntryValidator:
    """
    Business rules an entry must satisfy before it is stored.

    Rules by payload:
        - emotion: a known EmotionType and a non-empty reason
        - victory: non-empty title
        - word:    non-empty word and definition
        - match:   non-empty team names, distinct ignoring case,
                   non-negative integer scores
        - every kind: note no longer than `note_max_length`

    Attributes:
        note_max_length: Maximum characters allowed in a note
    """

    def __init__(self, note_max_length: int = 150) -> None:
        self.note_max_length = note_max_length

    def validate(self, entry: Entry) -> Entry:
        """
        Validate an entry and return its normalized form.

        Normalization strips text fields and turns blank notes/categories
        into None.

        Raises:
            ValidationError: On the first rule the entry breaks
        """
        payload = self._validate_payload(entry.payload)
        note = DataValidator.normalize_string(entry.note)
        if note is not None and len(note) > self.note_max_length:
            raise ValidationError(
                f"Note is {len(note)} characters; maximum is {self.note_max_length}"
            )
        category = DataValidator.normalize_string(entry.category)
        return entry.replace(payload=payload, note=note, category=category)

    def _validate_payload(self, payload: Any) -> Any:
        if isinstance(payload, EmotionPayload):
            if not isinstance(payload.emotion, EmotionType):
                raise ValidationError(f"Unknown emotion: {payload.emotion!r}")
            reason = DataValidator.validate_required_text(payload.reason, "reason")
            return EmotionPayload(emotion=payload.emotion, reason=reason)

        if isinstance(payload, VictoryPayload):
            return VictoryPayload(
                title=DataValidator.validate_required_text(payload.title, "title")
            )

        if isinstance(payload, WordPayload):
            return WordPayload(
                word=DataValidator.validate_required_text(payload.word, "word"),
                definition=DataValidator.validate_required_text(
                    payload.definition, "definition"
                ),
            )

        if isinstance(payload, MatchPayload):
            home = DataValidator.validate_required_text(payload.home_team, "home_team")
            away = DataValidator.validate_required_text(payload.away_team, "away_team")
            if home.casefold() == away.casefold():
                raise ValidationError(f"Team names must differ: '{home}' vs '{away}'")
            return MatchPayload(
                home_team=home,
                away_team=away,
                home_score=DataValidator.normalize_score(payload.home_score, "home_score"),
                away_score=DataValidator.normalize_score(payload.away_score, "away_score"),
                mvp=DataValidator.normalize_string(payload.mvp),
            )

        raise ValidationError(f"Unsupported entry payload: {type(payload).__name__}")
