#!/usr/bin/env python3
"""
Almanac Database Package
---------------------------
Persistence collaborators and data export for the journal store.

- persistence: Snapshot, Persistence protocol, memory/SQLite/YAML backends
- export_manager: JSON, CSV and text exports
- decorators: Operation logging and backend error conversion
- models: SQLAlchemy ORM tables for the SQLite backend
"""
from almanac.core.exceptions import DatabaseError, ExportError, PersistenceError

from .decorators import handle_persistence_errors, log_store_operation
from .export_manager import ExportManager
from .persistence import (
    MemoryPersistence,
    Persistence,
    Snapshot,
    SqlitePersistence,
    YamlPersistence,
    create_persistence,
)

__all__ = [
    # Exceptions
    "DatabaseError",
    "ExportError",
    "PersistenceError",
    # Decorators
    "handle_persistence_errors",
    "log_store_operation",
    # Persistence
    "MemoryPersistence",
    "Persistence",
    "Snapshot",
    "SqlitePersistence",
    "YamlPersistence",
    "create_persistence",
    # Export
    "ExportManager",
]
