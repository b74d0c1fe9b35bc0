"""
Core Models
-----------

Journal tables for the SQLite backend.

Models:
    - EntryRecord: One active or archived entry
    - CategoryRecord: One registry category

Entries keep their variant payload as JSON next to the shared columns, so a
new tracker variant never needs a schema change. `position` preserves list
order across a save/load round trip; `archived` separates the two lists.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Any, Dict, Optional

# --- Third party ---
from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

# --- Local imports ---
from almanac.dataclasses import Category, Entry, EntryKind, payload_from_dict

from .base import Base


class EntryRecord(Base):
    """
    Persisted journal entry.

    Attributes:
        id: Entry id (uuid4 hex)
        date: Naive local datetime of the entry
        kind: Payload variant (EntryKind value)
        payload: Variant fields as a JSON object
        category: Category name, weak reference
        note: Optional short note
        archived: True when the entry lives in the archive
        position: Order within its list
    """

    __tablename__ = "entries"
    __table_args__ = (
        CheckConstraint(
            "kind IN ('emotion', 'victory', 'word', 'match')", name="ck_entry_kind"
        ),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    payload: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    note: Mapped[Optional[str]] = mapped_column(Text)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    @classmethod
    def from_entry(cls, entry: Entry, position: int, archived: bool) -> "EntryRecord":
        return cls(
            id=entry.id,
            date=entry.date,
            kind=entry.kind.value,
            payload=entry.payload.to_dict(),
            category=entry.category,
            note=entry.note,
            archived=archived,
            position=position,
        )

    def to_entry(self) -> Entry:
        return Entry(
            payload=payload_from_dict(EntryKind(self.kind), dict(self.payload)),
            date=self.date,
            category=self.category,
            note=self.note,
            id=self.id,
        )

    def __repr__(self) -> str:
        return f"<EntryRecord(id={self.id}, kind={self.kind}, date={self.date})>"


class CategoryRecord(Base):
    """
    Persisted registry category.

    Attributes:
        id: Category id (uuid4 hex)
        name: Display name
        color_index: Display color ordinal
        position: Order within the registry
    """

    __tablename__ = "categories"
    __table_args__ = (CheckConstraint("name != ''", name="ck_non_empty_category"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    @classmethod
    def from_category(cls, category: Category, position: int) -> "CategoryRecord":
        return cls(
            id=category.id,
            name=category.name,
            color_index=category.color_index,
            position=position,
        )

    def to_category(self) -> Category:
        return Category(name=self.name, color_index=self.color_index, id=self.id)

    def __repr__(self) -> str:
        return f"<CategoryRecord(id={self.id}, name={self.name})>"
