"""
test_filters.py
---------------
Unit tests for almanac.query.filters: DateRange, FilterConfig, matching and
sorting.
"""
from datetime import date, datetime

import pytest

from almanac.core.exceptions import ValidationError
from almanac.dataclasses import EmotionType, EntryKind, Period
from almanac.query import DateRange, FilterConfig, SortOrder, apply_filters, sort_entries


@pytest.fixture
def journal(make_victory, make_emotion, make_word):
    return [
        make_victory(title="Ran 5k", date=datetime(2024, 1, 9, 7, 0), category="Health", note="Felt strong"),
        make_victory(title="Shipped release", date=datetime(2024, 1, 2, 18, 0), category="Work"),
        make_emotion(EmotionType.JOY, date=datetime(2024, 1, 10, 8, 0), reason="Sunshine"),
        make_emotion(EmotionType.TIRED, date=datetime(2023, 12, 1, 22, 0), reason="Late night"),
        make_word(date=datetime(2024, 1, 5, 12, 0)),
    ]


class TestDateRange:
    """Test DateRange validation."""

    def test_accepts_strings(self):
        span = DateRange("2024-01-01", "2024-01-07")
        assert span.start == date(2024, 1, 1)
        assert span.days == 7
        assert span.contains(date(2024, 1, 7))
        assert not span.contains(date(2024, 1, 8))

    def test_single_day(self):
        assert DateRange(date(2024, 1, 1), date(2024, 1, 1)).days == 1

    def test_end_before_start(self):
        with pytest.raises(ValidationError, match="ends before it starts"):
            DateRange("2024-01-07", "2024-01-01")


class TestFilterConfig:
    """Test FilterConfig coercion."""

    def test_default_is_empty(self):
        assert FilterConfig().is_empty
        assert FilterConfig(period=Period.ALL, search="  ").is_empty

    def test_coerces_strings(self):
        config = FilterConfig(period="week", emotions=["joy"], kinds=["word"])
        assert config.period is Period.WEEK
        assert config.emotions == frozenset({EmotionType.JOY})
        assert config.kinds == frozenset({EntryKind.WORD})
        assert not config.is_empty


class TestApplyFilters:
    """Test apply_filters() function."""

    def test_no_config_keeps_everything(self, journal, now):
        assert apply_filters(journal, now=now) == journal

    def test_period_window(self, journal, now):
        titles = [e.title for e in apply_filters(journal, FilterConfig(period=Period.WEEK), now=now)]
        assert titles == ["Ran 5k", "joy", "petrichor"]

    def test_period_boundary_is_inclusive(self, make_victory, now):
        edge = make_victory(date=datetime(2024, 1, 3, 12, 0))
        before = make_victory(date=datetime(2024, 1, 3, 11, 59))
        visible = apply_filters([edge, before], FilterConfig(period=Period.WEEK), now=now)
        assert visible == [edge]

    def test_date_range(self, journal, now):
        config = FilterConfig(date_range=DateRange("2024-01-02", "2024-01-05"))
        assert [e.title for e in apply_filters(journal, config, now=now)] == [
            "Shipped release",
            "petrichor",
        ]

    def test_category_is_exact(self, journal, now):
        assert len(apply_filters(journal, FilterConfig(category="Health"), now=now)) == 1
        assert apply_filters(journal, FilterConfig(category="health"), now=now) == []

    def test_search_title_and_note(self, journal, now):
        assert [e.title for e in apply_filters(journal, FilterConfig(search="SHIP"), now=now)] == [
            "Shipped release"
        ]
        assert [e.title for e in apply_filters(journal, FilterConfig(search="strong"), now=now)] == [
            "Ran 5k"
        ]

    def test_emotions_exclude_other_kinds(self, journal, now):
        visible = apply_filters(journal, FilterConfig(emotions={EmotionType.JOY}), now=now)
        assert [e.title for e in visible] == ["joy"]

    def test_kinds(self, journal, now):
        visible = apply_filters(journal, FilterConfig(kinds={EntryKind.EMOTION}), now=now)
        assert {e.kind for e in visible} == {EntryKind.EMOTION}
        assert len(visible) == 2

    def test_criteria_combine(self, journal, now):
        config = FilterConfig(period=Period.MONTH, kinds={EntryKind.VICTORY}, search="ran")
        assert [e.title for e in apply_filters(journal, config, now=now)] == ["Ran 5k"]

    def test_result_is_subset(self, journal, now):
        config = FilterConfig(period=Period.MONTH)
        visible = apply_filters(journal, config, SortOrder.TITLE_ASC, now=now)
        assert all(entry in journal for entry in visible)
        assert len(visible) <= len(journal)

    @pytest.mark.parametrize("order", list(SortOrder))
    def test_filtering_twice_changes_nothing(self, journal, now, order):
        config = FilterConfig(period=Period.MONTH, search="r")
        once = apply_filters(journal, config, order, now=now)

        assert once
        assert apply_filters(once, config, order, now=now) == once

    def test_source_not_modified(self, journal, now):
        before = list(journal)
        apply_filters(journal, FilterConfig(period=Period.WEEK), SortOrder.DATE_ASC, now=now)
        assert journal == before


class TestSortEntries:
    """Test sort_entries() function."""

    def test_date_orders(self, journal):
        newest = sort_entries(journal, SortOrder.DATE_DESC)
        assert newest[0].title == "joy"
        assert sort_entries(journal, SortOrder.DATE_ASC) == list(reversed(newest))

    def test_title_orders_ignore_case(self, make_victory):
        entries = [make_victory(title="banana"), make_victory(title="Apple"), make_victory(title="cherry")]
        assert [e.title for e in sort_entries(entries, SortOrder.TITLE_ASC)] == ["Apple", "banana", "cherry"]
        assert [e.title for e in sort_entries(entries, SortOrder.TITLE_DESC)] == ["cherry", "banana", "Apple"]

    def test_category_uncategorized_last(self, make_victory):
        entries = [
            make_victory(title="none"),
            make_victory(title="work", category="Work"),
            make_victory(title="health", category="health"),
        ]
        assert [e.title for e in sort_entries(entries, SortOrder.CATEGORY_ASC)] == ["health", "work", "none"]

    def test_ties_keep_input_order(self, make_victory):
        when = datetime(2024, 1, 1, 9, 0)
        entries = [make_victory(title=t, date=when) for t in ("first", "second", "third")]
        assert [e.title for e in sort_entries(entries, SortOrder.DATE_DESC)] == ["first", "second", "third"]
        assert [e.title for e in sort_entries(entries, SortOrder.DATE_ASC)] == ["first", "second", "third"]

    def test_string_order_accepted(self, journal):
        assert sort_entries(journal, "date_asc")[0].title == "tired"
