#!/usr/bin/env python3
"""
Almanac Journal CLI
-----------------------------------

Command-line interface for the journal.

This module provides the main CLI group and shared context setup for all
journal commands.

Command Structure:
    - Entries (entry): add, list, show, update-note, delete, archive,
      restore, archived, purge
    - Categories (category): add, rename, delete, list
    - Statistics (stats): summary, streak, patterns, trends, achievements
    - Export (export): json, csv, text

Usage:
    # Get general help
    almanac --help

    # Record a small win
    almanac entry add victory --title "Ran 5k" --category Health

    # Use a YAML journal somewhere else
    almanac --backend yaml --data-path ~/wins.yaml stats summary
"""
import click
from pathlib import Path

from almanac.core.cli_utils import setup_logger
from almanac.core.config import BACKENDS, Settings, load_settings
from almanac.core.exceptions import AlmanacError, NotFoundError, ValidationError
from almanac.core.logging_manager import AlmanacLogger, handle_cli_error
from almanac.database.persistence import create_persistence
from almanac.dataclasses import Entry
from almanac.store import JournalStore, create_store


@click.group()
@click.option(
    "--data-path",
    type=click.Path(),
    default=None,
    help="Journal file (default depends on the backend)",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default=None,
    help="Persistence backend",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="Settings file (YAML)",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=None,
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, data_path, backend, config_path, log_dir, verbose):
    """Almanac: a small journal for emotions, wins, words and matches."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        settings = load_settings(Path(config_path) if config_path else None)
        settings = settings.with_overrides(
            backend=backend, data_path=data_path, log_dir=log_dir
        )
    except AlmanacError as e:
        handle_cli_error(ctx, e, "load_settings", {"config": config_path})

    ctx.obj["settings"] = settings


def get_settings(ctx) -> Settings:
    return ctx.obj.get("settings") or Settings()


def get_logger(ctx) -> AlmanacLogger:
    """Get or create the CLI logger from context."""
    if "logger" not in ctx.obj:
        ctx.obj["logger"] = setup_logger(
            get_settings(ctx).log_dir, "cli", verbose=ctx.obj.get("verbose", False)
        )
    return ctx.obj["logger"]


def get_store(ctx) -> JournalStore:
    """Get or create the journal store from context."""
    if "store" not in ctx.obj:
        settings = get_settings(ctx)
        logger = get_logger(ctx)
        try:
            persistence = create_persistence(
                settings.backend, settings.resolved_data_path, logger
            )
            ctx.obj["store"] = create_store(persistence, logger, settings)
        except AlmanacError as e:
            handle_cli_error(
                ctx,
                e,
                "open_journal",
                {"backend": settings.backend, "path": str(settings.resolved_data_path)},
            )
    return ctx.obj["store"]


def find_entry(store: JournalStore, identifier: str, archived: bool = False) -> Entry:
    """
    Resolve a full id or a unique id prefix to an entry.

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If the prefix matches several entries
    """
    items = store.entries.get_archived() if archived else store.entries.get_all()
    exact = [entry for entry in items if entry.id == identifier]
    if exact:
        return exact[0]

    candidates = [entry for entry in items if entry.id.startswith(identifier)]
    if not candidates:
        raise NotFoundError("archived entry" if archived else "entry", identifier)
    if len(candidates) > 1:
        raise ValidationError(f"Ambiguous id prefix '{identifier}' ({len(candidates)} matches)")
    return candidates[0]


def format_entry(entry: Entry) -> str:
    """One-line listing of an entry."""
    line = f"{entry.id[:8]}  {entry.date:%Y-%m-%d %H:%M}  [{entry.kind.value}] {entry.title}"
    if entry.category:
        line += f"  ({entry.category})"
    return line


# Import and register command modules
# These imports must come after CLI group definition
from .entries import entry  # noqa: E402
from .categories import category  # noqa: E402
from .stats import stats  # noqa: E402
from .export import export  # noqa: E402

# Register command groups
cli.add_command(entry)
cli.add_command(category)
cli.add_command(stats)
cli.add_command(export)
