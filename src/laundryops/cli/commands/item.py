"""Catalog item commands."""

import click
from laundryops.cli.error_handling import check_access, handle_domain_error
from laundryops.domain.access import ITEMS
from laundryops.domain.item import ItemService
from laundryops.utils.amount_parser import format_rupiah, parse_amount


@click.group()
@click.pass_context
def item_group(ctx):
    """Manage the linen item catalog."""
    check_access(ctx, ITEMS)


@item_group.command("list")
@click.pass_context
def list_items(ctx):
    """List catalog items with their unit prices."""
    service = ItemService(ctx.obj["db"])

    items = service.list_items()
    if not items:
        click.echo("No items found. Run 'seed' to create the default catalog.")
        return

    click.echo(f"\n{'ID':<5} {'Name':<28} {'Category':<15} {'Price':>12}")
    click.echo("-" * 63)
    for item in items:
        click.echo(
            f"{item.id:<5} {item.name:<28} {item.category:<15} {format_rupiah(item.price):>12}"
        )


@item_group.command("create")
@click.argument("name")
@click.option("--category", required=True, help="Category name (e.g., 'Linen')")
@click.option("--price", required=True, help="Unit price (e.g., '15000' or 'Rp 15,000')")
@click.option("--id", "item_id", type=int, help="Explicit item ID")
@click.pass_context
def create_item(ctx, name: str, category: str, price: str, item_id: int):
    """Create a catalog item."""
    service = ItemService(ctx.obj["db"])

    try:
        new_id = service.create_item(
            name=name, category=category, price=parse_amount(price), item_id=item_id
        )
        click.echo(f"Created item '{name}' (ID: {new_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@item_group.command("update")
@click.argument("item_id", type=int)
@click.option("--name", help="New name")
@click.option("--category", help="New category name")
@click.option("--price", help="New unit price")
@click.pass_context
def update_item(ctx, item_id: int, name: str, category: str, price: str):
    """Update a catalog item."""
    service = ItemService(ctx.obj["db"])

    try:
        service.update_item(
            item_id,
            name=name,
            category=category,
            price=parse_amount(price) if price is not None else None,
        )
        click.echo(f"Updated item {item_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@item_group.command("delete")
@click.argument("item_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_item(ctx, item_id: int, yes: bool):
    """Delete a catalog item."""
    service = ItemService(ctx.obj["db"])

    if not yes:
        click.confirm(f"Delete item {item_id}?", abort=True)

    try:
        service.delete_item(item_id)
        click.echo(f"Deleted item {item_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register item commands with main CLI."""
    cli.add_command(item_group, name="item")
