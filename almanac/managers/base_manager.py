#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing the shared journal state and common helpers.
All journal managers inherit from this class.

Key Features:
    - One JournalState shared by every manager of a store
    - Id resolution for "entry or id" arguments
    - Change notification hook the store uses for observers and persistence

Usage:
    Subclass BaseManager for each collection and call `self._changed(name)`
    after every successful mutation:

    class EntryManager(BaseManager):
        @log_store_operation("add_entry")
        def add(self, entry: Entry) -> Entry:
            ...
            self._changed("add_entry")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, TypeVar, Union

# --- Local imports ---
from almanac.core.logging_manager import AlmanacLogger
from almanac.dataclasses import Category, Entry


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Optional[str]


T = TypeVar("T", bound=HasId)


@dataclass
class JournalState:
    """
    Mutable in-memory journal state.

    Attributes:
        entries: Active entries in insertion order
        archive: Archived entries in archive order
        categories: Registry categories in insertion order
    """

    entries: List[Entry] = field(default_factory=list)
    archive: List[Entry] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)


class BaseManager(ABC):
    """
    Abstract base manager over a shared JournalState.

    Attributes:
        state: Journal state shared with sibling managers
        logger: Optional logger for operation tracking
        on_change: Callback invoked with the operation name after a mutation
    """

    def __init__(
        self,
        state: JournalState,
        logger: Optional[AlmanacLogger] = None,
        on_change: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the base manager.

        Args:
            state: Shared journal state
            logger: Optional logger for operation tracking
            on_change: Optional mutation callback
        """
        self.state = state
        self.logger = logger
        self.on_change = on_change

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _changed(self, operation: str) -> None:
        """Signal a completed mutation."""
        if self.on_change is not None:
            self.on_change(operation)

    @staticmethod
    def _resolve_id(item_or_id: Union[HasId, str]) -> str:
        """
        Extract the id from an object or pass a string id through.

        Raises:
            TypeError: If the object carries no id
        """
        if isinstance(item_or_id, str):
            return item_or_id
        identifier = getattr(item_or_id, "id", None)
        if not identifier:
            raise TypeError(f"Object has no id: {item_or_id!r}")
        return identifier

    @staticmethod
    def _index_of(items: Sequence[T], identifier: str) -> Optional[int]:
        """Position of the item with `identifier`, or None."""
        for index, item in enumerate(items):
            if item.id == identifier:
                return index
        return None
