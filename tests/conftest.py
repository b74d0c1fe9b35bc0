"""
conftest.py
-----------
Shared pytest fixtures for Almanac tests.

Provides fixtures for:
- Temporary paths
- A fixed reference time
- Entry factories for every payload kind
- In-memory journal stores
"""
import pytest
from pathlib import Path
from datetime import datetime
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

from almanac.core.logging_manager import AlmanacLogger
from almanac.database.persistence import MemoryPersistence
from almanac.dataclasses import (
    EmotionPayload,
    EmotionType,
    Entry,
    MatchPayload,
    VictoryPayload,
    WordPayload,
)
from almanac.store import create_store


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Time Fixtures -----

@pytest.fixture
def now():
    """Fixed reference time: Wednesday 2024-01-10 at noon."""
    return datetime(2024, 1, 10, 12, 0)


# ----- Entry Factories -----

@pytest.fixture
def make_victory():
    """Factory for victory entries."""
    def _make(title="Ran 5k", date=datetime(2024, 1, 10, 9, 0), category=None, note=None, id=None):
        return Entry(
            payload=VictoryPayload(title=title),
            date=date,
            category=category,
            note=note,
            id=id,
        )
    return _make


@pytest.fixture
def make_emotion():
    """Factory for emotion entries."""
    def _make(emotion=EmotionType.JOY, date=datetime(2024, 1, 10, 9, 0), reason="Sunny day", category=None):
        return Entry(
            payload=EmotionPayload(emotion=emotion, reason=reason),
            date=date,
            category=category,
        )
    return _make


@pytest.fixture
def make_word():
    """Factory for word entries."""
    def _make(word="petrichor", definition="Smell of rain on dry earth", date=datetime(2024, 1, 10, 9, 0)):
        return Entry(payload=WordPayload(word=word, definition=definition), date=date)
    return _make


@pytest.fixture
def make_match():
    """Factory for match entries."""
    def _make(
        home="Lions",
        away="Tigers",
        home_score=2,
        away_score=1,
        date=datetime(2024, 1, 10, 20, 0),
        mvp=None,
    ):
        return Entry(
            payload=MatchPayload(
                home_team=home,
                away_team=away,
                home_score=home_score,
                away_score=away_score,
                mvp=mvp,
            ),
            date=date,
        )
    return _make


# ----- Store Fixtures -----

@pytest.fixture
def mock_logger():
    """Mock logger with the AlmanacLogger interface."""
    return MagicMock(spec=AlmanacLogger)


@pytest.fixture
def persistence():
    """In-memory persistence that counts saves."""
    return MemoryPersistence()


@pytest.fixture
def store(persistence):
    """Empty journal store over in-memory persistence."""
    return create_store(persistence)


@pytest.fixture
def store_with_categories(store):
    """Store with Health, Work and Family categories."""
    for name in ("Health", "Work", "Family"):
        store.categories.add(name)
    return store
