#!/usr/bin/env python3
"""
entry.py
-------------------

Defines the Entry dataclass and its variant payloads.

An Entry is a single dated record. Everything the store, filters and
analytics need is shared across variants (id, date, category, note); the
variant-specific part lives in a payload:

    - EmotionPayload: emotion type and the reason behind it
    - VictoryPayload: title of a small win
    - WordPayload:    a word and its definition
    - MatchPayload:   two teams and their scores

Payloads expose `kind` and `primary_text`, which is all the generic machinery
uses. Entries are immutable; updates go through `Entry.replace()`.

Serialization:
    entry.to_dict() ->
        {
            "id": "4f0c...",
            "date": "2024-01-15T09:30:00",
            "kind": "victory",
            "payload": {"title": "Ran 5k"},
            "category": "Health",
            "note": None,
        }
"""
from __future__ import annotations

# --- Standard Library ---
import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, ClassVar, Dict, Optional, Type, Union

# --- Local ---
from .enums import EmotionType, EntryKind


def new_id() -> str:
    """Generate a fresh unique identifier."""
    return uuid.uuid4().hex


def coerce_datetime(value: Union[date, datetime, str]) -> datetime:
    """
    Normalize an entry date to a naive local datetime.

    Plain dates become midnight of that day; ISO strings are parsed;
    aware datetimes are converted to local time and made naive.

    Raises:
        TypeError: If the value is not a date, datetime or ISO string
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Unsupported entry date: {value!r}")


# ----- Payloads -----
@dataclass(frozen=True)
class EmotionPayload:
    """How the user felt, and why."""

    kind: ClassVar[EntryKind] = EntryKind.EMOTION

    emotion: EmotionType
    reason: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.emotion, str) and not isinstance(self.emotion, EmotionType):
            object.__setattr__(self, "emotion", EmotionType(self.emotion.lower()))

    @property
    def primary_text(self) -> str:
        return self.emotion.value

    def to_dict(self) -> Dict[str, Any]:
        return {"emotion": self.emotion.value, "reason": self.reason}


@dataclass(frozen=True)
class VictoryPayload:
    """A small win worth remembering."""

    kind: ClassVar[EntryKind] = EntryKind.VICTORY

    title: str

    @property
    def primary_text(self) -> str:
        return self.title

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title}


@dataclass(frozen=True)
class WordPayload:
    """A collected word and what it means."""

    kind: ClassVar[EntryKind] = EntryKind.WORD

    word: str
    definition: str

    @property
    def primary_text(self) -> str:
        return self.word

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "definition": self.definition}


@dataclass(frozen=True)
class MatchPayload:
    """A match result between a home and an away team, with an optional MVP."""

    kind: ClassVar[EntryKind] = EntryKind.MATCH

    home_team: str
    away_team: str
    home_score: int = 0
    away_score: int = 0
    mvp: Optional[str] = None

    @property
    def primary_text(self) -> str:
        return f"{self.home_team} {self.home_score} - {self.away_score} {self.away_team}"

    @property
    def winner(self) -> Optional[str]:
        """Winning team name, or None for a draw."""
        if self.home_score == self.away_score:
            return None
        return self.home_team if self.home_score > self.away_score else self.away_team

    @property
    def result(self) -> str:
        """"home", "away" or "draw", from the home team's side."""
        if self.home_score == self.away_score:
            return "draw"
        return "home" if self.home_score > self.away_score else "away"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "home_team": self.home_team,
            "away_team": self.away_team,
            "home_score": self.home_score,
            "away_score": self.away_score,
        }
        if self.mvp:
            data["mvp"] = self.mvp
        return data


Payload = Union[EmotionPayload, VictoryPayload, WordPayload, MatchPayload]

PAYLOAD_TYPES: Dict[EntryKind, Type[Any]] = {
    EntryKind.EMOTION: EmotionPayload,
    EntryKind.VICTORY: VictoryPayload,
    EntryKind.WORD: WordPayload,
    EntryKind.MATCH: MatchPayload,
}


def payload_from_dict(kind: Union[EntryKind, str], data: Dict[str, Any]) -> Payload:
    """
    Rebuild a payload from its serialized form.

    Args:
        kind: Entry kind (enum or its string value)
        data: Payload fields as produced by `to_dict()`

    Returns:
        Payload instance of the matching variant

    Raises:
        ValueError: If the kind is unknown
    """
    payload_cls = PAYLOAD_TYPES[EntryKind(kind)]
    return payload_cls(**data)


# ----- Entry -----
@dataclass(frozen=True)
class Entry:
    """
    A single dated, optionally categorized journal record.

    Fields:
    - payload:  Variant-specific content (see module docstring)
    - date:     When it happened (naive local datetime; dates become midnight)
    - category: Name of a category (weak reference, may go stale on rename)
    - note:     Optional short free text
    - id:       Unique id, assigned by the store when missing
    """

    payload: Payload
    date: datetime = field(default_factory=datetime.now)
    category: Optional[str] = None
    note: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", coerce_datetime(self.date))

    # ---- Capabilities ----
    @property
    def kind(self) -> EntryKind:
        return self.payload.kind

    @property
    def title(self) -> str:
        """Primary text of the payload (emotion, title, word or match line)."""
        return self.payload.primary_text

    @property
    def day(self) -> date:
        """Local calendar day of the entry."""
        return self.date.date()

    @property
    def hour(self) -> int:
        return self.date.hour

    @property
    def emotion(self) -> Optional[EmotionType]:
        """Emotion of an emotion entry, None for every other kind."""
        if isinstance(self.payload, EmotionPayload):
            return self.payload.emotion
        return None

    # ---- Copies ----
    def replace(self, **changes: Any) -> "Entry":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def with_id(self) -> "Entry":
        """Return self if it has an id, otherwise a copy with a fresh one."""
        return self if self.id else self.replace(id=new_id())

    # ---- Serialization ----
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "kind": self.kind.value,
            "payload": self.payload.to_dict(),
            "category": self.category,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        """
        Build an Entry from its serialized form.

        Raises:
            KeyError: If kind, payload or date is missing
            ValueError: If kind or date cannot be parsed
        """
        return cls(
            payload=payload_from_dict(data["kind"], data["payload"]),
            date=coerce_datetime(data["date"]),
            category=data.get("category"),
            note=data.get("note"),
            id=data.get("id"),
        )
