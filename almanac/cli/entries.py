"""
Entry Commands
--------------

Record, browse and manage journal entries.

Commands:
    - add: Record a new entry of any kind
    - list: List active entries through the filter/sort pipeline
    - show: Show one entry in full
    - update-note: Replace the note of an entry
    - delete: Delete an active entry
    - archive / restore: Move an entry to the archive and back
    - archived: List archived entries
    - purge: Permanently delete an archived entry
"""
import click

from almanac.core.exceptions import AlmanacError, ValidationError
from almanac.core.logging_manager import handle_cli_error
from almanac.core.validators import DataValidator
from almanac.dataclasses import (
    EmotionPayload,
    EmotionType,
    Entry,
    EntryKind,
    MatchPayload,
    Period,
    VictoryPayload,
    WordPayload,
)
from almanac.query.filters import DateRange, FilterConfig, SortOrder
from . import find_entry, format_entry, get_store

PAYLOAD_LABELS = {"mvp": "MVP"}


@click.group()
@click.pass_context
def entry(ctx: click.Context) -> None:
    """Record and manage journal entries."""
    pass


def build_payload(kind: EntryKind, options: dict):
    """
    Build the payload for `kind` from command options.

    Raises:
        ValidationError: If a required option is missing
    """
    if kind is EntryKind.EMOTION:
        if not options["emotion"]:
            raise ValidationError("--emotion is required for emotion entries")
        return EmotionPayload(emotion=EmotionType(options["emotion"]), reason=options["reason"] or "")
    if kind is EntryKind.VICTORY:
        return VictoryPayload(title=options["title"] or "")
    if kind is EntryKind.WORD:
        return WordPayload(word=options["word"] or "", definition=options["definition"] or "")
    return MatchPayload(
        home_team=options["home"] or "",
        away_team=options["away"] or "",
        home_score=options["home_score"],
        away_score=options["away_score"],
        mvp=options["mvp"],
    )


@entry.command("add")
@click.argument("kind", type=click.Choice(EntryKind.choices()))
@click.option("--date", "when", help="Date/time (YYYY-MM-DD[THH:MM]); default now")
@click.option("--category", help="Category name")
@click.option("--note", help="Short note")
@click.option("--emotion", type=click.Choice(EmotionType.choices()), help="Emotion (emotion entries)")
@click.option("--reason", help="Why you felt it (emotion entries)")
@click.option("--title", help="Title (victory entries)")
@click.option("--word", help="Word (word entries)")
@click.option("--definition", help="Definition (word entries)")
@click.option("--home", help="Home team (match entries)")
@click.option("--away", help="Away team (match entries)")
@click.option("--home-score", type=int, default=0, help="Home score (match entries)")
@click.option("--away-score", type=int, default=0, help="Away score (match entries)")
@click.option("--mvp", help="Best player (match entries)")
@click.pass_context
def add(ctx, kind, when, category, note, **payload_options):
    """Record a new entry of KIND."""
    try:
        store = get_store(ctx)
        payload = build_payload(EntryKind(kind), payload_options)
        draft = Entry(payload=payload, category=category, note=note)
        if when:
            draft = draft.replace(date=DataValidator.normalize_datetime(when))

        stored = store.submit(draft)
        click.echo(f"✅ Added {stored.kind.display_name.lower()} entry {stored.id[:8]}")
        click.echo(f"  {format_entry(stored)}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_add", additional_context={"kind": kind})


@entry.command("list")
@click.option("--period", type=click.Choice(Period.choices()), help="Relative window")
@click.option("--from", "start", help="First day (YYYY-MM-DD)")
@click.option("--to", "end", help="Last day (YYYY-MM-DD)")
@click.option("--category", help="Exact category name")
@click.option("--search", help="Text in title or note")
@click.option("--emotion", "emotions", multiple=True, type=click.Choice(EmotionType.choices()))
@click.option("--kind", "kinds", multiple=True, type=click.Choice(EntryKind.choices()))
@click.option(
    "--sort",
    type=click.Choice(SortOrder.choices()),
    default=SortOrder.DATE_DESC.value,
    show_default=True,
)
@click.option("--limit", type=int, default=None, help="Show at most N entries")
@click.pass_context
def list_entries(ctx, period, start, end, category, search, emotions, kinds, sort, limit):
    """List active entries."""
    try:
        store = get_store(ctx)
        date_range = None
        if start or end:
            date_range = DateRange(start or end, end or start)

        config = FilterConfig(
            period=Period(period) if period else None,
            date_range=date_range,
            category=category,
            search=search,
            emotions=frozenset(emotions),
            kinds=frozenset(kinds),
        )
        visible = store.query(config, sort=SortOrder(sort))

        if not visible:
            click.echo("No entries found")
            return

        for item in visible[:limit] if limit else visible:
            click.echo(format_entry(item))
        click.echo(f"\nTotal: {len(visible)} entries")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_list")


@entry.command("show")
@click.argument("entry_id")
@click.option("--archived", is_flag=True, help="Look in the archive")
@click.pass_context
def show(ctx, entry_id, archived):
    """Show one entry in full."""
    try:
        item = find_entry(get_store(ctx), entry_id, archived=archived)

        click.echo(f"📄 {item.kind.display_name}: {item.title}")
        click.echo(f"  ID:       {item.id}")
        click.echo(f"  Date:     {item.date:%Y-%m-%d %H:%M}")
        for key, value in item.payload.to_dict().items():
            label = PAYLOAD_LABELS.get(key, key.replace("_", " ").title()) + ":"
            click.echo(f"  {label:<9} {value}")
        click.echo(f"  Category: {item.category or '-'}")
        click.echo(f"  Note:     {item.note or '-'}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_show", additional_context={"entry_id": entry_id})


@entry.command("update-note")
@click.argument("entry_id")
@click.argument("note")
@click.pass_context
def update_note(ctx, entry_id, note):
    """Replace the note of an entry (empty string clears it)."""
    try:
        store = get_store(ctx)
        item = find_entry(store, entry_id)
        store.submit_update(item.replace(note=note or None))
        click.echo(f"✅ Updated note of {item.id[:8]}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_update_note", additional_context={"entry_id": entry_id})


@entry.command("delete")
@click.argument("entry_id")
@click.pass_context
def delete(ctx, entry_id):
    """Delete an active entry."""
    try:
        store = get_store(ctx)
        item = find_entry(store, entry_id)
        store.delete(item)
        click.echo(f"🗑️  Deleted {item.id[:8]}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_delete", additional_context={"entry_id": entry_id})


@entry.command("archive")
@click.argument("entry_id")
@click.pass_context
def archive(ctx, entry_id):
    """Move an entry to the archive."""
    try:
        store = get_store(ctx)
        moved = store.archive(find_entry(store, entry_id))
        click.echo(f"📦 Archived {moved.id[:8]}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_archive", additional_context={"entry_id": entry_id})


@entry.command("restore")
@click.argument("entry_id")
@click.pass_context
def restore(ctx, entry_id):
    """Move an archived entry back to the journal."""
    try:
        store = get_store(ctx)
        moved = store.restore(find_entry(store, entry_id, archived=True))
        click.echo(f"♻️  Restored {moved.id[:8]}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_restore", additional_context={"entry_id": entry_id})


@entry.command("archived")
@click.pass_context
def archived(ctx):
    """List archived entries, newest first."""
    try:
        items = get_store(ctx).query(archived=True)
        if not items:
            click.echo("Archive is empty")
            return
        for item in items:
            click.echo(format_entry(item))
        click.echo(f"\nTotal: {len(items)} archived entries")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_archived")


@entry.command("purge")
@click.argument("entry_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def purge(ctx, entry_id, yes):
    """Permanently delete an archived entry."""
    try:
        store = get_store(ctx)
        item = find_entry(store, entry_id, archived=True)
        if not yes:
            click.confirm(f"Permanently delete '{item.title}'?", abort=True)
        store.entries.delete_archived(item)
        click.echo(f"🗑️  Purged {item.id[:8]}")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "entry_purge", additional_context={"entry_id": entry_id})
