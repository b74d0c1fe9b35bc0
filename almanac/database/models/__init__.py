"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Almanac SQLite backend.

- base: Declarative base
- core: EntryRecord and CategoryRecord

Usage:
    from almanac.database.models import Base, EntryRecord, CategoryRecord
"""
from .base import Base
from .core import CategoryRecord, EntryRecord

__all__ = ["Base", "CategoryRecord", "EntryRecord"]
