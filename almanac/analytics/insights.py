#!/usr/bin/env python3
"""
insights.py
------------------
Report assembly over the analytics functions.

InsightsAnalytics turns an entry list into the plain dictionaries the CLI
prints and exports: a summary, distribution patterns, trends and
achievements for a chosen period.
"""
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from almanac.core.logging_manager import AlmanacLogger
from almanac.database.decorators import log_store_operation
from almanac.dataclasses import Entry, Period, StreakPolicy

from . import achievements as badges_mod
from . import counts, streaks
from . import patterns as pattern_stats
from . import trends as trend_stats


class InsightsAnalytics:
    """
    Builds insight reports from entry lists.

    Attributes:
        logger: Optional logger for report operations
        streak_policy: Policy used for every "current streak" figure
        top_n: How many categories the top-categories list keeps
    """

    def __init__(
        self,
        logger: Optional[AlmanacLogger] = None,
        streak_policy: StreakPolicy = StreakPolicy.ANCHORED,
        top_n: int = 5,
    ) -> None:
        self.logger = logger
        self.streak_policy = streak_policy
        self.top_n = top_n

    @staticmethod
    def _window(
        entries: Sequence[Entry], period: Period, now: datetime
    ) -> Sequence[Entry]:
        return counts.entries_in_period(entries, Period(period).days, now)

    @log_store_operation("insights_summary")
    def summary(
        self,
        entries: Sequence[Entry],
        period: Period = Period.MONTH,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Headline numbers for a period.

        Streaks are computed over the full history; everything else over the
        period.

        Returns:
            Dictionary with totals, best day, average per day, streaks, the
            count trend and the most common category
        """
        now = now or datetime.now()
        period = Period(period)
        windowed = self._window(entries, period, now)
        best = counts.best_day(windowed)
        common = counts.most_common(windowed, lambda e: e.category)
        trend = trend_stats.count_trend(windowed, period.days, now) if period.days else None

        return {
            "period": period.value,
            "total_entries": len(entries),
            "period_entries": len(windowed),
            "unique_days": len(counts.unique_days(windowed)),
            "best_day": {"date": best[0].isoformat(), "count": best[1]} if best else None,
            "average_per_day": counts.average_per_day(windowed, period.days),
            "current_streak": streaks.current_streak(
                entries, today=now.date(), policy=self.streak_policy
            ),
            "longest_streak": streaks.longest_streak(entries),
            "trend": trend.direction.value if trend else None,
            "most_common_category": common[0] if common else None,
        }

    @log_store_operation("insights_patterns")
    def patterns(
        self,
        entries: Sequence[Entry],
        period: Period = Period.MONTH,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Histograms and breakdowns for a period, as plain dictionaries."""
        now = now or datetime.now()
        period = Period(period)
        windowed = self._window(entries, period, now)
        histograms = pattern_stats.compute_histograms(windowed, top_n=self.top_n, days=period.days)
        return {
            name: [item.to_dict() for item in items]
            for name, items in histograms.items()
        }

    @log_store_operation("insights_trends")
    def trends(
        self,
        entries: Sequence[Entry],
        period: Period = Period.MONTH,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Mood, frequency and weekly trends."""
        now = now or datetime.now()
        period = Period(period)
        windowed = self._window(entries, period, now)
        mood = trend_stats.mood_trend(entries, now)
        frequency = trend_stats.frequency_trend(entries, now)
        return {
            "mood_score": trend_stats.mood_score(windowed),
            "mood_trend": mood.to_dict() if mood else None,
            "frequency_trend": frequency.to_dict() if frequency else None,
            "weekly_counts": [week.to_dict() for week in trend_stats.weekly_counts(windowed)],
            "category_trends": [
                trend.to_dict() for trend in trend_stats.category_trends(windowed)[: self.top_n]
            ],
        }

    @log_store_operation("insights_achievements")
    def achievements(
        self, entries: Sequence[Entry], now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Every badge plus the next goal per metric, recomputed from scratch."""
        today = (now or datetime.now()).date()
        badges = badges_mod.compute_achievements(
            entries, today=today, policy=self.streak_policy
        )
        goals = badges_mod.next_goals(entries, today=today, policy=self.streak_policy)
        return {
            "unlocked": sum(1 for badge in badges if badge.unlocked),
            "total": len(badges),
            "achievements": [badge.to_dict() for badge in badges],
            "next_goals": [goal.to_dict() for goal in goals],
        }
