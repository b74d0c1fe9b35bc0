"""
Almanac
=======

A personal journaling core for small dated trackers.

This package contains the shared machinery behind four tracker variants
(daily emotions, small wins, rare words and match results). Every variant
records dated entries with a variant-specific payload, groups them into
user-defined categories, and derives statistics such as streaks, weekday
and time-of-day patterns, trends and achievements.

Main Components:
    - dataclasses: Entry, payload variants and Category
    - managers: In-memory entry store (with archive) and category registry
    - store: JournalStore facade wiring managers, validation and persistence
    - query: Filter/sort pipeline over entry lists
    - analytics: Pure statistics functions (counts, streaks, patterns, trends)
    - database: Persistence collaborators (SQLite, YAML, memory) and export
    - core: Exceptions, logging, paths, configuration, validation
    - cli: Click command-line interface

Primary Interfaces:
    - almanac.store.create_store: Build a JournalStore from a persistence backend
    - almanac.analytics: compute_streak, compute_histograms, compute_achievements
    - almanac.cli: `almanac` command

Example Usage:
    >>> from datetime import datetime
    >>> from almanac import create_store, compute_streak, Entry, VictoryPayload
    >>> store = create_store()
    >>> store.categories.add("Health")
    >>> store.submit(Entry(date=datetime.now(), payload=VictoryPayload("Ran 5k"),
    ...                    category="Health"))
    >>> compute_streak(store.entries.get_all())
    1

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Almanac Project"

from almanac.dataclasses import (
    Category,
    EmotionPayload,
    EmotionType,
    Entry,
    EntryKind,
    MatchPayload,
    VictoryPayload,
    WordPayload,
)
from almanac.store import JournalStore, create_store
from almanac.analytics import (
    compute_achievements,
    compute_histograms,
    compute_streak,
)

__all__ = [
    "Category",
    "EmotionPayload",
    "EmotionType",
    "Entry",
    "EntryKind",
    "MatchPayload",
    "VictoryPayload",
    "WordPayload",
    "JournalStore",
    "create_store",
    "compute_achievements",
    "compute_histograms",
    "compute_streak",
]
