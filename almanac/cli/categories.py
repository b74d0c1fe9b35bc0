"""
Category Commands
-----------------

Manage the category registry.

Commands:
    - add: Create a category
    - rename: Rename a category, optionally migrating its entries
    - delete: Delete a category no entry uses
    - list: List categories with live usage counts
"""
import click

from almanac.core.exceptions import AlmanacError, NotFoundError
from almanac.core.logging_manager import handle_cli_error
from almanac.dataclasses import Category
from almanac.managers import CategoryManager
from . import get_store


def resolve_category(categories: CategoryManager, identifier: str) -> Category:
    """
    Find a category by id or by name (case-insensitive).

    Raises:
        NotFoundError: If neither matches
    """
    found = categories.get_by_id(identifier) or categories.get(identifier)
    if found is None:
        raise NotFoundError("category", identifier)
    return found


@click.group()
@click.pass_context
def category(ctx: click.Context) -> None:
    """Manage categories."""
    pass


@category.command("add")
@click.argument("name")
@click.option("--color", "color_index", type=int, default=None, help="Color index")
@click.pass_context
def add(ctx, name, color_index):
    """Create a category called NAME."""
    try:
        created = get_store(ctx).categories.add(name, color_index=color_index)
        click.echo(f"✅ Created category '{created.name}' (color {created.color_index})")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "category_add", additional_context={"name": name})


@category.command("rename")
@click.argument("identifier")
@click.argument("new_name")
@click.option(
    "--migrate/--no-migrate",
    default=False,
    show_default=True,
    help="Also rewrite entries that use the old name",
)
@click.pass_context
def rename(ctx, identifier, new_name, migrate):
    """Rename the category IDENTIFIER (id or name) to NEW_NAME."""
    try:
        categories = get_store(ctx).categories
        current = resolve_category(categories, identifier)
        renamed = categories.rename(current, new_name, migrate_entries=migrate)
        click.echo(f"✅ Renamed '{current.name}' → '{renamed.name}'")
        if not migrate:
            stale = categories.entries.count_for_category(current.name)
            if stale and current.name.casefold() != renamed.name.casefold():
                click.echo(f"  ⚠️  {stale} entries still use '{current.name}'")

    except AlmanacError as e:
        handle_cli_error(
            ctx, e, "category_rename", additional_context={"category": identifier}
        )


@category.command("delete")
@click.argument("identifier")
@click.pass_context
def delete(ctx, identifier):
    """Delete the category IDENTIFIER (id or name)."""
    try:
        categories = get_store(ctx).categories
        current = resolve_category(categories, identifier)
        categories.delete(current)
        click.echo(f"🗑️  Deleted category '{current.name}'")

    except AlmanacError as e:
        handle_cli_error(
            ctx, e, "category_delete", additional_context={"category": identifier}
        )


@category.command("list")
@click.option(
    "--order-by",
    type=click.Choice(["name", "color_index", "usage", "insertion"]),
    default="name",
    show_default=True,
)
@click.option("--unused", is_flag=True, help="Only categories no entry uses")
@click.pass_context
def list_categories(ctx, order_by, unused):
    """List categories with usage counts."""
    try:
        categories = get_store(ctx).categories
        items = categories.get_unused() if unused else categories.get_all(order_by)

        if not items:
            click.echo("No categories found")
            return

        click.echo("🏷️  Categories:")
        for item in items:
            count = categories.entries_count(item)
            click.echo(f"  • {item.name} ({count} entries, color {item.color_index})")

    except AlmanacError as e:
        handle_cli_error(ctx, e, "category_list")
