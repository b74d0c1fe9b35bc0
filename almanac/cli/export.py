"""
Export Commands
---------------

Journal export commands to various formats.

Commands:
    - json: Export entries, archive and categories to JSON
    - csv: Export active entries to CSV
    - text: Export active entries as a readable listing
"""
from pathlib import Path

import click

from almanac.core.exceptions import AlmanacError
from almanac.core.logging_manager import handle_cli_error
from almanac.core.paths import EXPORT_DIR
from almanac.database import ExportManager
from . import get_logger, get_store


@click.group()
@click.pass_context
def export(ctx: click.Context) -> None:
    """Export the journal to various formats."""
    pass


def _report(stats: dict) -> None:
    click.echo(f"✅ Export complete: {stats['total_entries']} entries")
    click.echo(f"  • Output: {stats['output_path']}")
    click.echo(f"  • Time: {stats['duration']:.2f}s")


@export.command("json")
@click.argument("output_file", type=click.Path(), default=str(EXPORT_DIR / "journal.json"))
@click.pass_context
def export_json(ctx, output_file):
    """Export the whole journal to JSON."""
    try:
        store = get_store(ctx)
        click.echo(f"📤 Exporting to JSON: {output_file}")

        stats = ExportManager(get_logger(ctx)).export_to_json(
            store.entries.get_all(),
            Path(output_file),
            categories=store.categories.get_all("insertion"),
            archive=store.entries.get_archived(),
        )
        _report(stats)

    except AlmanacError as e:
        handle_cli_error(
            ctx, e, "export_json", additional_context={"output_file": output_file}
        )


@export.command("csv")
@click.argument("output_file", type=click.Path(), default=str(EXPORT_DIR / "journal.csv"))
@click.pass_context
def export_csv(ctx, output_file):
    """Export active entries to CSV."""
    try:
        store = get_store(ctx)
        click.echo(f"📤 Exporting to CSV: {output_file}")

        stats = ExportManager(get_logger(ctx)).export_to_csv(
            store.entries.get_all(), Path(output_file)
        )
        _report(stats)

    except AlmanacError as e:
        handle_cli_error(
            ctx, e, "export_csv", additional_context={"output_file": output_file}
        )


@export.command("text")
@click.argument("output_file", type=click.Path(), default=str(EXPORT_DIR / "journal.txt"))
@click.pass_context
def export_text(ctx, output_file):
    """Export active entries as plain text, newest first."""
    try:
        store = get_store(ctx)
        click.echo(f"📤 Exporting to text: {output_file}")

        stats = ExportManager(get_logger(ctx)).export_to_text(
            store.entries.get_all(), Path(output_file)
        )
        _report(stats)

    except AlmanacError as e:
        handle_cli_error(
            ctx, e, "export_text", additional_context={"output_file": output_file}
        )
