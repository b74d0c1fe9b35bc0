"""
Journal managers: the in-memory entry store and the category registry.

Both managers share one JournalState and report mutations through the
`on_change` hook set by JournalStore.
"""
from .base_manager import BaseManager, JournalState
from .category_manager import CategoryManager
from .entry_manager import EntryManager

__all__ = ["BaseManager", "CategoryManager", "EntryManager", "JournalState"]
