#!/usr/bin/env python3
"""
persistence.py
--------------------
Persistence collaborators for the journal store.

The store keeps its state in memory and hands a Snapshot to a persistence
backend after every mutation. Backends only need two methods:

    load() -> Snapshot
    save(snapshot) -> None

Backends:
    - MemoryPersistence: Keeps the last saved snapshot in memory (tests, demos)
    - SqlitePersistence: SQLAlchemy ORM over a SQLite file
    - YamlPersistence:   One PyYAML document, replaced atomically on save

Every backend failure surfaces as PersistenceError.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol

# --- Third party imports ---
import yaml
from sqlalchemy import create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from almanac.core.exceptions import PersistenceError
from almanac.core.logging_manager import AlmanacLogger, safe_logger
from almanac.dataclasses import Category, Entry

from .decorators import handle_persistence_errors
from .models import Base, CategoryRecord, EntryRecord

SCHEMA_VERSION = 1


@dataclass
class Snapshot:
    """
    Full journal state as seen by a persistence backend.

    Attributes:
        entries: Active entries in insertion order
        categories: Registry categories in insertion order
        archive: Archived entries in archive order
    """

    entries: List[Entry] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    archive: List[Entry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.entries or self.categories or self.archive)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": SCHEMA_VERSION,
            "entries": [entry.to_dict() for entry in self.entries],
            "categories": [category.to_dict() for category in self.categories],
            "archive": [entry.to_dict() for entry in self.archive],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snapshot":
        """
        Rebuild a snapshot from its serialized form.

        Raises:
            PersistenceError: If any record is malformed
        """
        try:
            return cls(
                entries=[Entry.from_dict(e) for e in data.get("entries") or []],
                categories=[
                    Category.from_dict(c) for c in data.get("categories") or []
                ],
                archive=[Entry.from_dict(e) for e in data.get("archive") or []],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Malformed journal record: {e}")


class Persistence(Protocol):
    """Storage collaborator used by JournalStore."""

    def load(self) -> Snapshot: ...

    def save(self, snapshot: Snapshot) -> None: ...


class MemoryPersistence:
    """
    In-memory backend.

    Keeps a copy of the last saved snapshot; `save_count` lets tests check
    that every mutation triggered a save.
    """

    def __init__(self, snapshot: Optional[Snapshot] = None) -> None:
        self._snapshot = self._copy(snapshot or Snapshot())
        self.save_count = 0

    @staticmethod
    def _copy(snapshot: Snapshot) -> Snapshot:
        # Entries and categories are frozen; copying the lists is enough
        return Snapshot(
            entries=list(snapshot.entries),
            categories=list(snapshot.categories),
            archive=list(snapshot.archive),
        )

    def load(self) -> Snapshot:
        return self._copy(self._snapshot)

    def save(self, snapshot: Snapshot) -> None:
        self._snapshot = self._copy(snapshot)
        self.save_count += 1


class SqlitePersistence:
    """
    SQLite backend using the SQLAlchemy ORM.

    Tables are created on first use. Each save rewrites both tables inside
    one transaction, so a failed save leaves the previous state intact.

    Attributes:
        db_path: SQLite file path
        logger: Optional logger for operation tracking
    """

    def __init__(
        self, db_path: Path, logger: Optional[AlmanacLogger] = None
    ) -> None:
        self.db_path = Path(db_path)
        self.logger = logger
        self._setup_engine()

    @handle_persistence_errors
    def _setup_engine(self) -> None:
        """Initialize database engine, session factory and schema."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.engine: Engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            future=True,
        )
        self.SessionLocal: sessionmaker = sessionmaker(
            bind=self.engine,
            autoflush=True,
            expire_on_commit=False,
            future=True,
        )
        Base.metadata.create_all(self.engine)
        safe_logger(self.logger).log_debug(
            "sqlite_ready", {"db_path": str(self.db_path)}
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        safe_logger(self.logger).log_debug("session_start", {"session_id": session_id})
        try:
            yield session
            session.commit()
            safe_logger(self.logger).log_debug(
                "session_commit", {"session_id": session_id}
            )
        except Exception as e:
            session.rollback()
            safe_logger(self.logger).log_error(
                e, {"operation": "session_rollback", "session_id": session_id}
            )
            raise
        finally:
            session.close()

    @handle_persistence_errors
    def load(self) -> Snapshot:
        with self.session_scope() as session:
            records = session.scalars(
                select(EntryRecord).order_by(EntryRecord.position)
            ).all()
            categories = session.scalars(
                select(CategoryRecord).order_by(CategoryRecord.position)
            ).all()
            try:
                return Snapshot(
                    entries=[r.to_entry() for r in records if not r.archived],
                    categories=[c.to_category() for c in categories],
                    archive=[r.to_entry() for r in records if r.archived],
                )
            except (KeyError, TypeError, ValueError) as e:
                raise PersistenceError(f"Malformed journal record: {e}")

    @handle_persistence_errors
    def save(self, snapshot: Snapshot) -> None:
        with self.session_scope() as session:
            session.execute(delete(EntryRecord))
            session.execute(delete(CategoryRecord))
            session.add_all(
                EntryRecord.from_entry(entry, position, archived=False)
                for position, entry in enumerate(snapshot.entries)
            )
            session.add_all(
                EntryRecord.from_entry(entry, position, archived=True)
                for position, entry in enumerate(snapshot.archive)
            )
            session.add_all(
                CategoryRecord.from_category(category, position)
                for position, category in enumerate(snapshot.categories)
            )

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


class YamlPersistence:
    """
    Single-file YAML backend.

    The document is written to a temporary file in the same directory and
    moved over the old one, so readers never see a half-written journal.

    Attributes:
        path: YAML file path
        logger: Optional logger for operation tracking
    """

    def __init__(self, path: Path, logger: Optional[AlmanacLogger] = None) -> None:
        self.path = Path(path)
        self.logger = logger

    @handle_persistence_errors
    def load(self) -> Snapshot:
        if not self.path.exists():
            return Snapshot()
        data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} does not contain a journal mapping")
        return Snapshot.from_dict(data)

    @handle_persistence_errors
    def save(self, snapshot: Snapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = yaml.safe_dump(
            snapshot.to_dict(), sort_keys=False, allow_unicode=True
        )
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(document)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        safe_logger(self.logger).log_debug(
            "yaml_saved", {"path": str(self.path), "entries": len(snapshot.entries)}
        )


def create_persistence(
    backend: str, path: Optional[Path] = None, logger: Optional[AlmanacLogger] = None
) -> Persistence:
    """
    Build a persistence backend by name.

    Args:
        backend: "sqlite", "yaml" or "memory"
        path: Storage file (ignored for memory)
        logger: Optional logger

    Raises:
        PersistenceError: If the backend is unknown or needs a missing path
    """
    if backend == "memory":
        return MemoryPersistence()
    if path is None:
        raise PersistenceError(f"Backend '{backend}' needs a data path")
    if backend == "sqlite":
        return SqlitePersistence(path, logger)
    if backend == "yaml":
        return YamlPersistence(path, logger)
    raise PersistenceError(f"Unknown persistence backend: {backend}")
