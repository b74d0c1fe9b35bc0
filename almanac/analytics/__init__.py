"""
Analytics Engine
----------------

Pure functions that fold entry lists into statistics:

- counts: totals, windows, best day, averages
- streaks: current and longest runs of consecutive days
- patterns: weekday/time-of-day histograms, category and emotion breakdowns,
  match results and MVP frequency
- trends: mood, frequency and count trends, weekly counts
- achievements: threshold badges, recomputed on every call
- insights: InsightsAnalytics report builder
"""
from .achievements import (
    ACHIEVEMENT_RULES,
    Achievement,
    AchievementRule,
    compute_achievements,
    next_goals,
    unlocked_achievements,
)
from .counts import (
    average_per_day,
    best_day,
    count_in_period,
    entries_in_period,
    most_common,
    total_count,
    unique_days,
)
from .insights import InsightsAnalytics
from .patterns import (
    Bucket,
    CategoryShare,
    WeekdayPattern,
    category_breakdown,
    compute_histograms,
    day_of_week_histogram,
    day_of_week_patterns,
    emotion_breakdown,
    match_results,
    mvp_frequency,
    time_of_day_histogram,
    top_categories,
    weekday_number,
)
from .streaks import compute_streak, current_streak, longest_streak
from .trends import (
    Trend,
    TrendDirection,
    WeeklyCount,
    category_trends,
    count_trend,
    frequency_trend,
    mood_score,
    mood_trend,
    weekly_counts,
)

__all__ = [
    "ACHIEVEMENT_RULES",
    "Achievement",
    "AchievementRule",
    "Bucket",
    "CategoryShare",
    "InsightsAnalytics",
    "Trend",
    "TrendDirection",
    "WeekdayPattern",
    "WeeklyCount",
    "average_per_day",
    "best_day",
    "category_breakdown",
    "category_trends",
    "compute_achievements",
    "compute_histograms",
    "compute_streak",
    "count_in_period",
    "count_trend",
    "current_streak",
    "day_of_week_histogram",
    "day_of_week_patterns",
    "emotion_breakdown",
    "entries_in_period",
    "frequency_trend",
    "longest_streak",
    "match_results",
    "mood_score",
    "mood_trend",
    "most_common",
    "mvp_frequency",
    "next_goals",
    "time_of_day_histogram",
    "top_categories",
    "total_count",
    "unique_days",
    "unlocked_achievements",
    "weekday_number",
    "weekly_counts",
]
