#!/usr/bin/env python3
"""
category_manager.py
--------------------
Manages the category registry.

Categories are named, colored groups that entries reference by name. The
registry keeps names unique ignoring case and refuses to delete a category
while active entries still point at it. Usage counts are never stored: they
are computed from the entry list at call time.

Key Features:
    - Add with case-insensitive duplicate detection
    - Rename, optionally migrating entry references
    - Delete guarded by a live usage count
    - Lookups by id or name and usage-based queries

Usage:
    categories = CategoryManager(state, logger)

    work = categories.add("Work")
    categories.rename(work.id, "Career", migrate_entries=True)

    # Fails while entries still reference it
    categories.delete(work.id)
"""
from typing import Callable, List, Optional, Union

from almanac.core.logging_manager import AlmanacLogger
from almanac.core.exceptions import (
    CategoryInUseError,
    DuplicateNameError,
    NotFoundError,
    ValidationError,
)
from almanac.core.validators import DataValidator
from almanac.database.decorators import log_store_operation
from almanac.dataclasses import Category
from .base_manager import BaseManager, JournalState
from .entry_manager import EntryManager

CategoryRef = Union[Category, str]


class CategoryManager(BaseManager):
    """
    Manages the category registry and its integrity with entries.

    Attributes:
        entries: Entry manager over the same state, used for usage counts
            and rename migration
    """

    def __init__(
        self,
        state: JournalState,
        logger: Optional[AlmanacLogger] = None,
        on_change: Optional[Callable[[str], None]] = None,
        entries: Optional[EntryManager] = None,
    ):
        super().__init__(state, logger, on_change)
        self.entries = entries or EntryManager(state, logger)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def exists(self, name: str) -> bool:
        """
        Check if a category exists without raising exceptions.

        Args:
            name: Category name, compared ignoring case

        Returns:
            True if a category with that name exists
        """
        return self.get(name) is not None

    def get(self, name: str) -> Optional[Category]:
        """
        Retrieve a category by name (case-insensitive).

        Returns:
            Category if found, None otherwise
        """
        normalized = DataValidator.normalize_string(name)
        if not normalized:
            return None

        for category in self.state.categories:
            if category.matches(normalized):
                return category
        return None

    get_by_name = get

    def get_by_id(self, category_id: str) -> Optional[Category]:
        index = self._index_of(self.state.categories, category_id)
        return self.state.categories[index] if index is not None else None

    def get_all(self, order_by: str = "name") -> List[Category]:
        """
        Retrieve all categories.

        Args:
            order_by: "name" (case-insensitive), "color_index", "usage"
                (most used first) or "insertion"

        Raises:
            ValueError: If order_by is unknown
        """
        categories = list(self.state.categories)
        if order_by == "name":
            return sorted(categories, key=lambda c: c.key)
        if order_by == "color_index":
            return sorted(categories, key=lambda c: c.color_index)
        if order_by == "usage":
            return sorted(categories, key=lambda c: (-self.entries_count(c), c.key))
        if order_by == "insertion":
            return categories
        raise ValueError(f"Unknown category ordering: {order_by}")

    def entries_count(self, category: CategoryRef) -> int:
        """Live count of active entries referencing the category's name."""
        return self.entries.count_for_category(self._require(category).name)

    def get_unused(self) -> List[Category]:
        """Categories no active entry references."""
        return [c for c in self.get_all() if self.entries_count(c) == 0]

    def canonical_name(self, name: str) -> Optional[str]:
        """Registry spelling of `name`, or None if no such category."""
        category = self.get(name)
        return category.name if category else None

    def _require(self, category: CategoryRef) -> Category:
        """
        Resolve a category object or id to the registry's current instance.

        Raises:
            NotFoundError: If the id is unknown
        """
        identifier = self._resolve_id(category)
        found = self.get_by_id(identifier)
        if found is None:
            raise NotFoundError("category", identifier)
        return found

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @log_store_operation("add_category")
    def add(self, name: str, color_index: Optional[int] = None) -> Category:
        """
        Create a new category.

        Args:
            name: Category name (stripped)
            color_index: Display color ordinal; defaults to the registry size

        Returns:
            Created Category

        Raises:
            ValidationError: If the name is empty
            DuplicateNameError: If a category with that name exists (any case)
        """
        normalized = DataValidator.normalize_string(name)
        if not normalized:
            raise ValidationError("Category name cannot be empty")

        if self.exists(normalized):
            raise DuplicateNameError(normalized)

        if color_index is None:
            color_index = len(self.state.categories)

        category = Category(name=normalized, color_index=color_index)
        self.state.categories.append(category)

        if self.logger:
            self.logger.log_debug(
                f"Created category: {normalized}", {"category_id": category.id}
            )

        self._changed("add_category")
        return category

    @log_store_operation("rename_category")
    def rename(
        self, category: CategoryRef, new_name: str, migrate_entries: bool = False
    ) -> Category:
        """
        Rename a category.

        Args:
            category: Category or id
            new_name: New name (stripped)
            migrate_entries: Also rewrite entries that reference the old name;
                by default they keep the stale name

        Returns:
            The renamed Category

        Raises:
            NotFoundError: If the category is unknown
            ValidationError: If the new name is empty
            DuplicateNameError: If a different category already has the name
        """
        current = self._require(category)
        normalized = DataValidator.normalize_string(new_name)
        if not normalized:
            raise ValidationError("Category name cannot be empty")

        clash = self.get(normalized)
        if clash is not None and clash.id != current.id:
            raise DuplicateNameError(normalized)

        renamed = current.renamed(normalized)
        index = self._index_of(self.state.categories, current.id)
        self.state.categories[index] = renamed

        migrated = 0
        if migrate_entries:
            migrated = self.entries.rename_category_references(
                current.name, normalized, notify=False
            )

        if self.logger:
            self.logger.log_debug(
                f"Renamed category: {current.name} -> {normalized}",
                {"category_id": current.id, "migrated_entries": migrated},
            )

        self._changed("rename_category")
        return renamed

    @log_store_operation("delete_category")
    def delete(self, category: CategoryRef) -> None:
        """
        Delete a category that no active entry references.

        Raises:
            NotFoundError: If the category is unknown
            CategoryInUseError: If active entries still reference it
        """
        current = self._require(category)
        count = self.entries.count_for_category(current.name)
        if count > 0:
            raise CategoryInUseError(current.name, count)

        index = self._index_of(self.state.categories, current.id)
        self.state.categories.pop(index)

        if self.logger:
            self.logger.log_debug(
                f"Deleting category: {current.name}", {"category_id": current.id}
            )

        self._changed("delete_category")
