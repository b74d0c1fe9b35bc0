"""
Achievement badges.

Badges come from a fixed, ordered rule table over three metrics: total entry
count, current streak and number of distinct categories. Nothing is stored:
every call recomputes from the entries it is given, so a badge disappears
again when deletions push a metric back under its threshold.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from almanac.dataclasses import Entry, StreakPolicy

from .streaks import current_streak

TOTAL = "total"
STREAK = "streak"
CATEGORIES = "categories"


@dataclass(frozen=True)
class AchievementRule:
    """Threshold rule for one badge."""

    id: str
    title: str
    description: str
    metric: str
    threshold: int


ACHIEVEMENT_RULES = (
    AchievementRule("first_victory", "First Steps", "Logged your first entry", TOTAL, 1),
    AchievementRule("ten_victories", "Getting Started", "Reached 10 entries", TOTAL, 10),
    AchievementRule("fifty_victories", "Half Century", "Reached 50 entries", TOTAL, 50),
    AchievementRule("hundred_victories", "Century", "Reached 100 entries", TOTAL, 100),
    AchievementRule("three_day_streak", "On Fire", "3-day streak", STREAK, 3),
    AchievementRule("week_streak", "Week Warrior", "7-day streak", STREAK, 7),
    AchievementRule("month_streak", "Consistency Master", "30-day streak", STREAK, 30),
    AchievementRule("explorer", "Explorer", "Used 3+ categories", CATEGORIES, 3),
    AchievementRule("diversifier", "Diversifier", "Used 5+ categories", CATEGORIES, 5),
)


@dataclass(frozen=True)
class Achievement:
    """
    Result of one rule.

    Attributes:
        id: Rule id
        title: Badge title
        description: What the badge rewards
        unlocked: Whether the threshold is met
        progress: 1.0 when unlocked, otherwise current / threshold
        current: Current metric value
        threshold: Value needed to unlock
    """

    id: str
    title: str
    description: str
    unlocked: bool
    progress: float
    current: int
    threshold: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def achievement_metrics(
    entries: Sequence[Entry],
    today: Optional[date] = None,
    policy: StreakPolicy = StreakPolicy.ANCHORED,
) -> Dict[str, int]:
    """Values of every metric the rules read."""
    return {
        TOTAL: len(entries),
        STREAK: current_streak(entries, today=today, policy=policy),
        CATEGORIES: len({entry.category for entry in entries if entry.category}),
    }


def evaluate(rule: AchievementRule, metrics: Dict[str, int]) -> Achievement:
    current = metrics[rule.metric]
    unlocked = current >= rule.threshold
    return Achievement(
        id=rule.id,
        title=rule.title,
        description=rule.description,
        unlocked=unlocked,
        progress=1.0 if unlocked else current / rule.threshold,
        current=current,
        threshold=rule.threshold,
    )


def compute_achievements(
    entries: Sequence[Entry],
    today: Optional[date] = None,
    policy: StreakPolicy = StreakPolicy.ANCHORED,
) -> List[Achievement]:
    """
    Evaluate every rule against the entries.

    Returns:
        One Achievement per rule; unlocked ones first, each group in rule order
    """
    metrics = achievement_metrics(entries, today=today, policy=policy)
    results = [evaluate(rule, metrics) for rule in ACHIEVEMENT_RULES]
    return sorted(results, key=lambda a: not a.unlocked)


def unlocked_achievements(
    entries: Sequence[Entry],
    today: Optional[date] = None,
    policy: StreakPolicy = StreakPolicy.ANCHORED,
) -> List[Achievement]:
    return [a for a in compute_achievements(entries, today, policy) if a.unlocked]


def next_goals(
    entries: Sequence[Entry],
    today: Optional[date] = None,
    policy: StreakPolicy = StreakPolicy.ANCHORED,
) -> List[Achievement]:
    """First locked rule of each metric, in rule order."""
    metrics = achievement_metrics(entries, today=today, policy=policy)
    goals: Dict[str, Achievement] = {}
    for rule in ACHIEVEMENT_RULES:
        if rule.metric in goals:
            continue
        result = evaluate(rule, metrics)
        if not result.unlocked:
            goals[rule.metric] = result
    return list(goals.values())
