#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Almanac project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    └── AlmanacError - Base for every project error
        ├── ValidationError - Caller input rejected before touching the store
        ├── DuplicateNameError - Category add/rename name collision
        ├── CategoryInUseError - Category delete while entries reference it
        ├── NotFoundError - Update/move/delete of an unknown id
        ├── ConfigError - Invalid settings file or values
        └── DatabaseError - Base for all persistence errors
            ├── PersistenceError - Load/save failures of a backend
            └── ExportError - Data export operation failures

Usage:
    from almanac.core.exceptions import CategoryInUseError, ValidationError

    try:
        store.categories.delete(category.id)
    except CategoryInUseError as e:
        logger.log_warning(f"Category still referenced: {e}")
"""


class AlmanacError(Exception):
    """
    Base exception for every error raised by Almanac.

    All errors are synchronous and recoverable: the operation that raised
    leaves the journal state unchanged.
    """

    pass


class ValidationError(AlmanacError):
    """
    Exception for data validation failures.

    Raised by the caller-facing submit step before the store is touched:
    - Empty required fields (title, word, definition, reason, team names)
    - Negative or non-integer match scores
    - Team names that match case-insensitively
    - Notes longer than the configured cap
    - Date ranges whose end precedes their start

    Examples:
        >>> raise ValidationError("Required field 'title' missing or empty")
        >>> raise ValidationError("Score must be a non-negative integer: -1")
    """

    pass


class DuplicateNameError(AlmanacError):
    """
    Exception for category name collisions.

    Category names are unique case-insensitively. Raised when adding a
    category whose name already exists, or when renaming a category to the
    name of a different one.

    Attributes:
        name: The rejected name
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Category already exists: {name}")


class CategoryInUseError(AlmanacError):
    """
    Exception for deleting a category that entries still reference.

    Attributes:
        name: Category name
        count: Number of active entries referencing it at call time
    """

    def __init__(self, name: str, count: int) -> None:
        self.name = name
        self.count = count
        super().__init__(
            f"Category '{name}' is used by {count} "
            f"{'entry' if count == 1 else 'entries'}"
        )


class NotFoundError(AlmanacError):
    """
    Exception for operations referencing an unknown id.

    Attributes:
        kind: What was looked up ("entry", "archived entry", "category")
        identifier: The id that was not found
    """

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"No {kind} found with id: {identifier}")


class ConfigError(AlmanacError):
    """
    Exception for invalid configuration.

    Examples:
        >>> raise ConfigError("Unknown setting: 'note_length'")
        >>> raise ConfigError("Invalid streak_policy: 'weekly'")
    """

    pass


class DatabaseError(AlmanacError):
    """
    Base exception for persistence-related errors.

    Raised when a storage backend fails: unreadable files, SQL errors,
    integrity violations or serialization problems.
    """

    pass


class PersistenceError(DatabaseError):
    """
    Exception for load/save failures of a persistence backend.

    The journal store treats a failed save as non-fatal: the in-memory
    mutation stands and the error is logged.

    Examples:
        >>> raise PersistenceError("Cannot write journal.yaml: permission denied")
    """

    pass


class ExportError(DatabaseError):
    """
    Exception for data export operation failures.

    Examples:
        >>> raise ExportError("Failed to export entries to CSV: permission denied")
    """

    pass
