"""
test_counts.py
--------------
Unit tests for almanac.analytics.counts.
"""
from datetime import date, datetime

from almanac.analytics import (
    average_per_day,
    best_day,
    count_in_period,
    entries_in_period,
    most_common,
    total_count,
    unique_days,
)


class TestPeriodCounts:
    """Test entries_in_period() and count_in_period()."""

    def test_window_is_inclusive_at_cutoff(self, make_victory, now):
        entries = [
            make_victory(date=datetime(2024, 1, 3, 12, 0)),
            make_victory(date=datetime(2024, 1, 3, 11, 0)),
            make_victory(date=datetime(2024, 1, 10, 8, 0)),
        ]
        assert count_in_period(entries, 7, now) == 2
        assert count_in_period(entries, None, now) == 3

    def test_returns_new_list(self, make_victory, now):
        entries = [make_victory()]
        assert entries_in_period(entries, None, now) is not entries

    def test_total(self, make_victory):
        assert total_count([make_victory(), make_victory()]) == 2
        assert total_count([]) == 0


class TestDays:
    """Test unique_days() and best_day()."""

    def test_unique_days_sorted(self, make_victory):
        entries = [
            make_victory(date=datetime(2024, 1, 3, 9)),
            make_victory(date=datetime(2024, 1, 1, 9)),
            make_victory(date=datetime(2024, 1, 3, 20)),
        ]
        assert unique_days(entries) == [date(2024, 1, 1), date(2024, 1, 3)]

    def test_best_day(self, make_victory):
        entries = [
            make_victory(date=datetime(2024, 1, 2, 9)),
            make_victory(date=datetime(2024, 1, 3, 9)),
            make_victory(date=datetime(2024, 1, 3, 21)),
        ]
        assert best_day(entries) == (date(2024, 1, 3), 2)

    def test_best_day_tie_goes_to_earliest(self, make_victory):
        entries = [
            make_victory(date=datetime(2024, 1, 5, 9)),
            make_victory(date=datetime(2024, 1, 2, 9)),
        ]
        assert best_day(entries) == (date(2024, 1, 2), 1)

    def test_best_day_empty(self):
        assert best_day([]) is None


class TestAverages:
    """Test average_per_day() and most_common()."""

    def test_average_over_window(self, make_victory):
        assert average_per_day([make_victory()] * 14, 7) == 2.0

    def test_average_over_span(self, make_victory):
        entries = [
            make_victory(date=datetime(2024, 1, 1, 9)),
            make_victory(date=datetime(2024, 1, 4, 9)),
        ]
        assert average_per_day(entries, None) == 0.5

    def test_average_empty(self):
        assert average_per_day([], None) == 0.0
        assert average_per_day([], 7) == 0.0

    def test_most_common_skips_none(self, make_victory):
        entries = [
            make_victory(category=None),
            make_victory(category=None),
            make_victory(category="Work"),
        ]
        assert most_common(entries, lambda e: e.category) == ("Work", 1)
        assert most_common([make_victory()], lambda e: e.category) is None
