"""
test_streaks.py
---------------
Unit tests for almanac.analytics.streaks.
"""
from datetime import date, datetime

import pytest

from almanac.analytics import compute_streak, current_streak, longest_streak
from almanac.dataclasses import StreakPolicy


@pytest.fixture
def on_days(make_victory):
    """Build one entry per given day (YYYY-MM-DD strings)."""
    def _build(*days):
        return [make_victory(date=datetime.fromisoformat(day + "T09:00")) for day in days]
    return _build


class TestCurrentStreak:
    """Test current_streak() function."""

    def test_empty(self):
        assert current_streak([]) == 0

    def test_single_day(self, on_days):
        assert current_streak(on_days("2024-01-10"), today=date(2024, 1, 10)) == 1

    def test_consecutive_days(self, on_days):
        entries = on_days("2024-01-08", "2024-01-09", "2024-01-10")
        assert current_streak(entries, today=date(2024, 1, 10)) == 3

    def test_same_day_counts_once(self, on_days, make_victory):
        entries = on_days("2024-01-09", "2024-01-10") + [make_victory(date=datetime(2024, 1, 10, 23, 0))]
        assert current_streak(entries, today=date(2024, 1, 10)) == 2

    def test_gap_breaks_run(self, on_days):
        entries = on_days("2024-01-05", "2024-01-06", "2024-01-09", "2024-01-10")
        assert current_streak(entries, today=date(2024, 1, 10)) == 2

    def test_input_order_irrelevant(self, on_days):
        entries = on_days("2024-01-10", "2024-01-08", "2024-01-09")
        assert current_streak(entries, today=date(2024, 1, 10)) == 3

    def test_anchored_ignores_today(self, on_days):
        """A run that ended last week still counts under ANCHORED."""
        entries = on_days("2024-01-01", "2024-01-02", "2024-01-03")
        assert current_streak(entries, today=date(2024, 1, 10), policy=StreakPolicy.ANCHORED) == 3

    def test_current_policy_resets_stale_run(self, on_days):
        entries = on_days("2024-01-01", "2024-01-02", "2024-01-03")
        assert current_streak(entries, today=date(2024, 1, 10), policy=StreakPolicy.CURRENT) == 0

    def test_current_policy_allows_yesterday(self, on_days):
        entries = on_days("2024-01-08", "2024-01-09")
        assert current_streak(entries, today=date(2024, 1, 10), policy=StreakPolicy.CURRENT) == 2

    def test_policy_string_accepted(self, on_days):
        entries = on_days("2024-01-01")
        assert current_streak(entries, today=date(2024, 1, 10), policy="current") == 0

    def test_compute_streak_alias(self, on_days):
        entries = on_days("2024-01-02", "2024-01-03")
        assert compute_streak(entries, today=date(2024, 1, 10)) == current_streak(entries)

    def test_bounded_by_distinct_days(self, on_days):
        entries = on_days("2024-01-01", "2024-01-03", "2024-01-04", "2024-01-05")
        assert 0 <= current_streak(entries) <= len({e.day for e in entries})


class TestLongestStreak:
    """Test longest_streak() function."""

    def test_empty(self):
        assert longest_streak([]) == 0

    def test_longest_run_anywhere(self, on_days):
        entries = on_days(
            "2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04",
            "2024-01-07", "2024-01-08",
        )
        assert longest_streak(entries) == 4
        assert current_streak(entries) == 2

    def test_month_boundary(self, on_days):
        assert longest_streak(on_days("2024-01-31", "2024-02-01", "2024-02-02")) == 3

    def test_at_least_current(self, on_days):
        entries = on_days("2024-01-01", "2024-01-05", "2024-01-06")
        assert longest_streak(entries) >= current_streak(entries)
