"""Category management commands."""

import click
from laundryops.cli.error_handling import check_access, handle_domain_error
from laundryops.domain.access import CATEGORIES
from laundryops.domain.category import CategoryService
from laundryops.domain.csv_import import CategoryImportService
from laundryops.domain.entities import CategoryStatus
from laundryops.domain.errors import ExportError
from laundryops.export import ExportService

STATUS_CHOICES = [s.value for s in CategoryStatus]


@click.group()
@click.pass_context
def category_group(ctx):
    """Manage item categories."""
    check_access(ctx, CATEGORIES)


@category_group.command("list")
@click.option("--search", "term", default="", help="Filter by name or code (case-insensitive)")
@click.pass_context
def list_categories(ctx, term: str):
    """List categories ordered by code."""
    service = CategoryService(ctx.obj["db"])

    categories = service.search_categories(term)
    if not categories:
        click.echo("No categories found. Run 'seed' to create default categories.")
        return

    click.echo(f"\n{'ID':<5} {'Code':<10} {'Name':<25} {'Status':<10} {'Items':>5}  Description")
    click.echo("-" * 87)
    for cat in categories:
        count = service.count_items_referencing(cat.name)
        click.echo(
            f"{cat.id:<5} {cat.code:<10} {cat.name:<25} {cat.status.value:<10} {count:>5}  "
            f"{cat.description}"
        )


@category_group.command("create")
@click.argument("code")
@click.argument("name")
@click.option("--description", default="", help="Free-text description")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), default="active", help="Category status (default: active)")
@click.pass_context
def create_category(ctx, code: str, name: str, description: str, status: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(
            code=code, name=name, description=description, status=status
        )
        click.echo(f"Created category '{name}' [{code}] (ID: {category_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("update")
@click.argument("category_id", type=int)
@click.option("--code", help="New code")
@click.option("--name", help="New name")
@click.option("--description", help="New description")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), help="New status")
@click.pass_context
def update_category(ctx, category_id: int, code: str, name: str, description: str, status: str):
    """Update a category's fields."""
    service = CategoryService(ctx.obj["db"])

    try:
        category = service.update_category(
            category_id, code=code, name=name, description=description, status=status
        )
        click.echo(f"Updated category '{category.name}' [{category.code}] (ID: {category.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_category(ctx, category_id: int, yes: bool):
    """Delete a category that no item references."""
    service = CategoryService(ctx.obj["db"])

    if not yes:
        click.confirm(f"Delete category {category_id}?", abort=True)

    try:
        service.delete_category(category_id)
        click.echo(f"Deleted category {category_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("export")
@click.argument("output", type=click.Path(dir_okay=False))
@click.pass_context
def export_categories(ctx, output: str):
    """Export all categories to a CSV file."""
    service = ExportService(ctx.obj["db"])

    try:
        path = service.export_categories(output)
        click.echo(f"Exported categories to {path}")
    except ExportError as e:
        handle_domain_error(ctx, e)


@category_group.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_categories(ctx, csv_file: str):
    """Import categories from a CSV file, one row at a time."""
    service = CategoryImportService(ctx.obj["db"])

    try:
        result = service.import_csv(csv_file)
    except (ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} categories")
    click.echo(f"  Failed: {result.failed}")
    for error in result.errors:
        click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
