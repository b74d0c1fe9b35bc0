#!/usr/bin/env python3
"""
category.py
-------------------

Defines the Category dataclass.

Categories are user-defined named groups. Entries point at them by name, not
by id, so the registry compares names case-insensitively and computes usage
counts on demand instead of storing them.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict

from .entry import new_id


@dataclass(frozen=True)
class Category:
    """
    A named, colored group entries can reference.

    Fields:
    - name:        Display name, unique case-insensitively in a registry
    - color_index: Small ordinal used to pick a display color
    - id:          Unique identifier
    """

    name: str
    color_index: int = 0
    id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", new_id())

    @property
    def key(self) -> str:
        """Case-insensitive comparison key for the name."""
        return self.name.casefold()

    def matches(self, name: str) -> bool:
        """Check whether `name` refers to this category (ignoring case)."""
        return self.key == name.strip().casefold()

    def renamed(self, new_name: str) -> "Category":
        return replace(self, name=new_name)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "color_index": self.color_index}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            name=data["name"],
            color_index=int(data.get("color_index", 0)),
            id=data.get("id", ""),
        )
