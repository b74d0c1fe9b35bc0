#!/usr/bin/env python3
"""
store.py
--------------------
JournalStore: the journal facade.

Wires the entry store and the category registry to one shared state, runs
caller-facing validation, notifies subscribers and asks the persistence
collaborator to save after every mutation.

Mutation contract:
    1. The change is applied in memory, synchronously
    2. Subscribers are called with the operation name
    3. The snapshot is saved; a failed save is logged and the in-memory
       change stands
    4. The mutating call returns

Usage:
    store = create_store(SqlitePersistence(DB_PATH), logger)
    store.categories.add("Health")
    store.submit(Entry(payload=VictoryPayload("Ran 5k"), category="health"))

    unsubscribe = store.subscribe(lambda op: print("changed:", op))
    store.query(FilterConfig(period=Period.WEEK))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Callable, List, Optional

# --- Local imports ---
from almanac.core.config import Settings
from almanac.core.exceptions import AlmanacError, ValidationError
from almanac.core.logging_manager import AlmanacLogger, safe_logger
from almanac.core.validators import EntryValidator
from almanac.database.decorators import log_store_operation
from almanac.database.persistence import MemoryPersistence, Persistence, Snapshot
from almanac.dataclasses import Entry
from almanac.managers import CategoryManager, EntryManager, JournalState
from almanac.managers.entry_manager import EntryRef
from almanac.query.filters import FilterConfig, SortOrder, apply_filters

Subscriber = Callable[[str], None]


class JournalStore:
    """
    Journal facade over entries, categories and persistence.

    Attributes:
        state: Shared in-memory state
        entries: Entry store (active list and archive)
        categories: Category registry
        persistence: Storage collaborator
        settings: Journal settings
        logger: Optional logger
    """

    def __init__(
        self,
        persistence: Persistence,
        state: Optional[JournalState] = None,
        logger: Optional[AlmanacLogger] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.persistence = persistence
        self.state = state or JournalState()
        self.logger = logger
        self.settings = settings or Settings()
        self.validator = EntryValidator(self.settings.note_max_length)
        self._subscribers: List[Subscriber] = []

        self.entries = EntryManager(self.state, logger, self._on_change)
        self.categories = CategoryManager(
            self.state, logger, self._on_change, entries=self.entries
        )

    # ---- Change handling ----
    def _on_change(self, operation: str) -> None:
        """
        Persist the mutation, then notify subscribers.

        A failing subscriber is logged and skipped; the mutation has already
        happened and been saved, and later subscribers still run.
        """
        self.save(operation)
        for callback in list(self._subscribers):
            try:
                callback(operation)
            except Exception as e:
                safe_logger(self.logger).log_error(
                    e,
                    {
                        "operation": "notify",
                        "trigger": operation,
                        "subscriber": getattr(callback, "__qualname__", repr(callback)),
                    },
                )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback run after every mutation.

        Returns:
            Function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def snapshot(self) -> Snapshot:
        return Snapshot(
            entries=list(self.state.entries),
            categories=list(self.state.categories),
            archive=list(self.state.archive),
        )

    def save(self, operation: str = "save") -> bool:
        """
        Hand the current snapshot to the persistence collaborator.

        Returns:
            True if the save succeeded; failures are logged, not raised
        """
        try:
            self.persistence.save(self.snapshot())
        except AlmanacError as e:
            safe_logger(self.logger).log_error(
                e, {"operation": "persist", "trigger": operation}
            )
            return False
        return True

    # ---- Validated writes ----
    def _validated(self, entry: Entry) -> Entry:
        """
        Apply the entry rules and resolve the category spelling.

        Raises:
            ValidationError: If a rule fails or the category is unknown
        """
        entry = self.validator.validate(entry)
        if entry.category is not None:
            canonical = self.categories.canonical_name(entry.category)
            if canonical is None:
                raise ValidationError(f"Unknown category: {entry.category}")
            entry = entry.replace(category=canonical)
        return entry

    @log_store_operation("submit_entry")
    def submit(self, entry: Entry) -> Entry:
        """
        Validate and add an entry.

        Raises:
            ValidationError: If the entry breaks a rule; the store is unchanged
        """
        return self.entries.add(self._validated(entry))

    @log_store_operation("submit_entry_update")
    def submit_update(self, entry: Entry) -> Entry:
        """
        Validate and replace an entry.

        Raises:
            ValidationError: If the entry breaks a rule
            NotFoundError: If no active entry has its id
        """
        return self.entries.update(self._validated(entry))

    # ---- Store operations ----
    def add(self, entry: Entry) -> Entry:
        return self.entries.add(entry)

    def update(self, entry: Entry) -> Entry:
        return self.entries.update(entry)

    def delete(self, entry: EntryRef) -> bool:
        return self.entries.delete(entry)

    def archive(self, entry: EntryRef) -> Entry:
        return self.entries.archive(entry)

    def restore(self, entry: EntryRef) -> Entry:
        return self.entries.restore(entry)

    def query(
        self,
        config: Optional[FilterConfig] = None,
        sort: Optional[SortOrder] = SortOrder.DATE_DESC,
        archived: bool = False,
        now: Optional[datetime] = None,
    ) -> List[Entry]:
        """Visible entries for a filter config, sorted (newest first by default)."""
        source = self.state.archive if archived else self.state.entries
        return apply_filters(source, config, sort=sort, now=now)


def create_store(
    persistence: Optional[Persistence] = None,
    logger: Optional[AlmanacLogger] = None,
    settings: Optional[Settings] = None,
) -> JournalStore:
    """
    Build a JournalStore from whatever the persistence collaborator holds.

    Args:
        persistence: Storage collaborator (default: in-memory)
        logger: Optional logger
        settings: Journal settings (default: Settings())

    Returns:
        JournalStore loaded with the stored snapshot

    Raises:
        PersistenceError: If the stored journal cannot be read
    """
    persistence = persistence or MemoryPersistence()
    snapshot = persistence.load()
    state = JournalState(
        entries=list(snapshot.entries),
        archive=list(snapshot.archive),
        categories=list(snapshot.categories),
    )
    safe_logger(logger).log_debug(
        "store_loaded",
        {
            "entries": len(state.entries),
            "archived": len(state.archive),
            "categories": len(state.categories),
        },
    )
    return JournalStore(persistence, state=state, logger=logger, settings=settings)
