"""
Statistics Commands
-------------------

Insights computed from the active entries.

Commands:
    - summary: Headline numbers for a period
    - streak: Current and longest streak
    - patterns: Weekday, time-of-day, category, emotion and match breakdowns
    - trends: Mood, frequency and weekly trends
    - achievements: Badges and next goals
"""
import json
from datetime import datetime

import click

from almanac.analytics import InsightsAnalytics, current_streak, longest_streak
from almanac.core.exceptions import AlmanacError
from almanac.core.logging_manager import handle_cli_error
from almanac.dataclasses import Period, StreakPolicy
from . import get_logger, get_settings, get_store


def get_analytics(ctx, policy=None) -> InsightsAnalytics:
    settings = get_settings(ctx)
    return InsightsAnalytics(
        logger=get_logger(ctx),
        streak_policy=StreakPolicy(policy) if policy else settings.streak_policy,
        top_n=settings.top_categories,
    )


def resolve_period(ctx, period) -> Period:
    return Period(period) if period else get_settings(ctx).default_period


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


period_option = click.option(
    "--period",
    type=click.Choice(Period.choices()),
    default=None,
    help="Window (default from settings)",
)
json_option = click.option("--json", "as_json", is_flag=True, help="Print raw JSON")


@click.group()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show journal statistics."""
    pass


@stats.command("summary")
@period_option
@json_option
@click.pass_context
def summary(ctx, period, as_json):
    """Headline numbers for a period."""
    try:
        period = resolve_period(ctx, period)
        report = get_analytics(ctx).summary(get_store(ctx).entries.get_all(), period)

        if as_json:
            echo_json(report)
            return

        click.echo(f"📊 Summary ({period.display_name}):")
        click.echo(f"  Entries:          {report['period_entries']} (of {report['total_entries']})")
        click.echo(f"  Days with entries: {report['unique_days']}")
        click.echo(f"  Average per day:  {report['average_per_day']:.1f}")
        best = report["best_day"]
        click.echo(f"  Best day:         {best['date']} ({best['count']})" if best else "  Best day:         -")
        click.echo(f"  Current streak:   {report['current_streak']} days")
        click.echo(f"  Longest streak:   {report['longest_streak']} days")
        click.echo(f"  Trend:            {report['trend'] or '-'}")
        click.echo(f"  Top category:     {report['most_common_category'] or '-'}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "stats_summary")


@stats.command("streak")
@click.option(
    "--policy",
    type=click.Choice(StreakPolicy.choices()),
    default=None,
    help="Streak policy (default from settings)",
)
@click.pass_context
def streak(ctx, policy):
    """Current and longest streak."""
    try:
        entries = get_store(ctx).entries.get_all()
        policy = StreakPolicy(policy) if policy else get_settings(ctx).streak_policy
        current = current_streak(entries, today=datetime.now().date(), policy=policy)
        click.echo(f"🔥 Current streak: {current} days ({policy.value})")
        click.echo(f"🏆 Longest streak: {longest_streak(entries)} days")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "stats_streak")


@stats.command("patterns")
@period_option
@json_option
@click.pass_context
def patterns(ctx, period, as_json):
    """Weekday, time-of-day, category, emotion and match breakdowns."""
    try:
        period = resolve_period(ctx, period)
        report = get_analytics(ctx).patterns(get_store(ctx).entries.get_all(), period)

        if as_json:
            echo_json(report)
            return

        click.echo(f"📅 Day of week ({period.display_name}):")
        for bucket in report["day_of_week"]:
            click.echo(f"  {bucket['label']:<10} {bucket['count']:>4}  {bucket['percentage']:5.1f}%")

        click.echo("\n🕐 Time of day:")
        for bucket in report["time_of_day"]:
            click.echo(f"  {bucket['label']:<10} {bucket['count']:>4}  {bucket['percentage']:5.1f}%")

        if report["top_categories"]:
            click.echo("\n🏷️  Top categories:")
            for share in report["top_categories"]:
                click.echo(
                    f"  {share['name']:<16} {share['count']:>4}  {share['percentage']:5.1f}%"
                    f"  ({share['average_per_day']:.2f}/day)"
                )

        if report["emotions"]:
            click.echo("\n💭 Emotions:")
            for bucket in report["emotions"]:
                click.echo(f"  {bucket['label']:<10} {bucket['count']:>4}  {bucket['percentage']:5.1f}%")

        if any(bucket["count"] for bucket in report["match_results"]):
            click.echo("\n⚽ Match results:")
            for bucket in report["match_results"]:
                click.echo(f"  {bucket['label']:<10} {bucket['count']:>4}  {bucket['percentage']:5.1f}%")

        if report["mvp_frequency"]:
            click.echo("\n🌟 MVP frequency:")
            for rank, bucket in enumerate(report["mvp_frequency"], start=1):
                awards = "MVP" if bucket["count"] == 1 else "MVPs"
                click.echo(f"  {rank}. {bucket['label']:<16} {bucket['count']} {awards}")

        for pattern in report["weekday_patterns"]:
            click.echo(f"\n✨ {pattern['description']} ({pattern['confidence'] * 100:.0f}%)")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "stats_patterns")


@stats.command("trends")
@period_option
@json_option
@click.pass_context
def trends(ctx, period, as_json):
    """Mood, frequency and weekly trends."""
    try:
        period = resolve_period(ctx, period)
        report = get_analytics(ctx).trends(get_store(ctx).entries.get_all(), period)

        if as_json:
            echo_json(report)
            return

        click.echo(f"📈 Trends ({period.display_name}):")
        click.echo(f"  Mood score: {report['mood_score']:.2f}")
        for label, key in (("Mood", "mood_trend"), ("Frequency", "frequency_trend")):
            trend = report[key]
            if trend:
                sign = "-" if trend["change"] < 0 else "+"
                click.echo(
                    f"  {label}: {trend['direction']} ({sign}{trend['change_percentage']:.0f}%)"
                )
            else:
                click.echo(f"  {label}: not enough data")

        if report["weekly_counts"]:
            click.echo("\n  Weekly entries:")
            for week in report["weekly_counts"]:
                click.echo(f"    {week['week_start']}  {week['count']}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "stats_trends")


@stats.command("achievements")
@json_option
@click.pass_context
def achievements(ctx, as_json):
    """Badges and next goals."""
    try:
        report = get_analytics(ctx).achievements(get_store(ctx).entries.get_all())

        if as_json:
            echo_json(report)
            return

        click.echo(f"🏅 Achievements: {report['unlocked']}/{report['total']} unlocked")
        for badge in report["achievements"]:
            mark = "✅" if badge["unlocked"] else "🔒"
            click.echo(f"  {mark} {badge['title']}: {badge['description']} ({badge['progress'] * 100:.0f}%)")

        if report["next_goals"]:
            click.echo("\n🎯 Next goals:")
            for goal in report["next_goals"]:
                click.echo(f"  • {goal['title']}: {goal['current']}/{goal['threshold']}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "stats_achievements")
