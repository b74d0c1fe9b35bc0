#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Entry store: the ordered list of active entries plus the archive.

The store is a plain data holder. It assigns ids, keeps insertion order and
moves entries between the active list and the archive; business rules are
checked upstream by EntryValidator (see JournalStore.submit).

Key Features:
    - Add, full-replace update, idempotent delete, bulk delete
    - Archive/restore that move an entry and keep its id and fields
    - Permanent deletion from the archive
    - Pure queries returning new lists (filter, stable sort, lookups)
    - Live per-category counts and opt-in rename migration

Usage:
    entries = EntryManager(state, logger)
    stored = entries.add(Entry(payload=VictoryPayload("Ran 5k")))
    entries.archive(stored.id)
    entries.restore(stored.id)
"""
from typing import Any, Callable, Iterable, List, Optional, Union

from almanac.core.exceptions import NotFoundError, ValidationError
from almanac.database.decorators import log_store_operation
from almanac.dataclasses import Entry
from .base_manager import BaseManager

EntryRef = Union[Entry, str]


class EntryManager(BaseManager):
    """
    Manages the active entry list and the archive.

    Entries are immutable; the lists hold the stored instances and every
    query returns a new list.
    """

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @log_store_operation("add_entry")
    def add(self, entry: Entry) -> Entry:
        """
        Append an entry to the active list.

        Args:
            entry: Entry to store; an id is assigned when missing

        Returns:
            The stored entry

        Raises:
            ValidationError: If another stored entry already has this id
        """
        stored = entry.with_id()
        if self._index_of(self.state.entries, stored.id) is not None or (
            self._index_of(self.state.archive, stored.id) is not None
        ):
            raise ValidationError(f"Entry id already exists: {stored.id}")

        self.state.entries.append(stored)

        if self.logger:
            self.logger.log_debug(
                f"Added {stored.kind.value} entry",
                {"entry_id": stored.id, "date": stored.date.isoformat()},
            )

        self._changed("add_entry")
        return stored

    @log_store_operation("update_entry")
    def update(self, entry: Entry) -> Entry:
        """
        Replace the active entry with the same id, keeping its position.

        Raises:
            NotFoundError: If no active entry has this id
        """
        index = self._index_of(self.state.entries, entry.id) if entry.id else None
        if index is None:
            raise NotFoundError("entry", str(entry.id))

        self.state.entries[index] = entry
        self._changed("update_entry")
        return entry

    @log_store_operation("delete_entry")
    def delete(self, entry: EntryRef) -> bool:
        """
        Remove an active entry by id.

        Returns:
            True if an entry was removed, False if it was already absent
        """
        index = self._index_of(self.state.entries, self._resolve_id(entry))
        if index is None:
            return False

        removed = self.state.entries.pop(index)

        if self.logger:
            self.logger.log_debug("Deleted entry", {"entry_id": removed.id})

        self._changed("delete_entry")
        return True

    @log_store_operation("delete_entries")
    def delete_many(self, entries: Iterable[EntryRef]) -> int:
        """
        Remove every listed id in one pass.

        Returns:
            Number of entries removed
        """
        ids = {self._resolve_id(entry) for entry in entries}
        kept = [entry for entry in self.state.entries if entry.id not in ids]
        removed = len(self.state.entries) - len(kept)

        if removed:
            self.state.entries[:] = kept
            self._changed("delete_entries")
        return removed

    # -------------------------------------------------------------------------
    # Archive
    # -------------------------------------------------------------------------

    @log_store_operation("archive_entry")
    def archive(self, entry: EntryRef) -> Entry:
        """
        Move an active entry to the archive.

        Raises:
            NotFoundError: If the id is not in the active list
        """
        identifier = self._resolve_id(entry)
        index = self._index_of(self.state.entries, identifier)
        if index is None:
            raise NotFoundError("entry", identifier)

        moved = self.state.entries.pop(index)
        self.state.archive.append(moved)
        self._changed("archive_entry")
        return moved

    @log_store_operation("restore_entry")
    def restore(self, entry: EntryRef) -> Entry:
        """
        Move an archived entry back to the end of the active list.

        Raises:
            NotFoundError: If the id is not in the archive
        """
        identifier = self._resolve_id(entry)
        index = self._index_of(self.state.archive, identifier)
        if index is None:
            raise NotFoundError("archived entry", identifier)

        moved = self.state.archive.pop(index)
        self.state.entries.append(moved)
        self._changed("restore_entry")
        return moved

    @log_store_operation("delete_archived_entry")
    def delete_archived(self, entry: EntryRef) -> bool:
        """
        Permanently remove an archived entry.

        Returns:
            True if removed, False if it was not in the archive
        """
        index = self._index_of(self.state.archive, self._resolve_id(entry))
        if index is None:
            return False

        self.state.archive.pop(index)
        self._changed("delete_archived_entry")
        return True

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def get_by_id(self, entry_id: str, archived: bool = False) -> Optional[Entry]:
        """Look up an entry in the active list (or the archive)."""
        items = self.state.archive if archived else self.state.entries
        index = self._index_of(items, entry_id)
        return items[index] if index is not None else None

    def get_all(self) -> List[Entry]:
        return list(self.state.entries)

    def get_archived(self) -> List[Entry]:
        return list(self.state.archive)

    def filter(self, predicate: Callable[[Entry], bool]) -> List[Entry]:
        return [entry for entry in self.state.entries if predicate(entry)]

    def sorted_by(
        self, key: Callable[[Entry], Any], reverse: bool = False
    ) -> List[Entry]:
        """Stable sort of the active entries; ties keep insertion order."""
        return sorted(self.state.entries, key=key, reverse=reverse)

    def count(self) -> int:
        return len(self.state.entries)

    def count_for_category(self, name: str) -> int:
        """
        Count active entries referencing a category name.

        Matching ignores case, like the registry's uniqueness rule.
        """
        key = name.strip().casefold()
        return sum(
            1
            for entry in self.state.entries
            if entry.category is not None and entry.category.casefold() == key
        )

    # -------------------------------------------------------------------------
    # Category References
    # -------------------------------------------------------------------------

    @log_store_operation("rename_category_references")
    def rename_category_references(
        self, old_name: str, new_name: str, notify: bool = True
    ) -> int:
        """
        Rewrite the category of every entry referencing `old_name`.

        Covers the active list and the archive. `notify=False` leaves change
        signalling to a caller that batches it with its own mutation.

        Returns:
            Number of entries rewritten
        """
        key = old_name.strip().casefold()
        rewritten = 0
        for items in (self.state.entries, self.state.archive):
            for index, entry in enumerate(items):
                if entry.category is not None and entry.category.casefold() == key:
                    items[index] = entry.replace(category=new_name)
                    rewritten += 1

        if rewritten and notify:
            self._changed("rename_category_references")
        return rewritten
