"""Log book commands."""

import click
from laundryops.cli.error_handling import check_access, handle_domain_error
from laundryops.domain.access import LOG_BOOK
from laundryops.domain.entities import ReturnStatus
from laundryops.domain.item import ItemService
from laundryops.domain.log_book import LogBookService
from laundryops.utils.date_parser import parse_date


def _resolve_date(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
@click.pass_context
def log_group(ctx):
    """Manage the daily linen log book."""
    check_access(ctx, LOG_BOOK)


@log_group.command("list")
@click.option("--status", type=click.Choice([s.value for s in ReturnStatus], case_sensitive=False), help="Only entries with this return status")
@click.pass_context
def list_entries(ctx, status: str):
    """List log book entries."""
    db = ctx.obj["db"]
    service = LogBookService(db)
    item_service = ItemService(db)

    entries = service.list_entries(status=ReturnStatus(status.lower()) if status else None)
    if not entries:
        click.echo("No log entries found.")
        return

    click.echo(
        f"\n{'ID':<5} {'Date':<11} {'Item':<26} {'Out':>5} {'In':>5} {'Pend':>5} "
        f"{'Ret':>5} {'Status':<10} Returned"
    )
    click.echo("-" * 100)
    for entry in entries:
        returned_on = entry.returned_date.strftime("%Y-%m-%d %H:%M") if entry.returned_date else "-"
        click.echo(
            f"{entry.id:<5} {entry.date.isoformat():<11} "
            f"{item_service.get_item_name(entry.item_id):<26} "
            f"{entry.out_quantity:>5} {entry.in_quantity:>5} {entry.pending_quantity:>5} "
            f"{entry.returned_quantity:>5} {entry.status.value:<10} {returned_on}"
        )


@log_group.command("add")
@click.option("--date", "entry_date", default="today", help="Pick-up date (YYYY-MM-DD, 'today', 'yesterday')")
@click.option("--item", "item_id", type=int, required=True, help="Catalog item ID")
@click.option("--out", "out_quantity", type=int, default=0, help="Pieces sent out")
@click.option("--in", "in_quantity", type=int, default=0, help="Pieces received back")
@click.option("--pending", "pending_quantity", type=int, default=0, help="Pieces still outstanding")
@click.pass_context
def add_entry(ctx, entry_date: str, item_id: int, out_quantity: int, in_quantity: int, pending_quantity: int):
    """Add a log book entry."""
    service = LogBookService(ctx.obj["db"])
    parsed_date = _resolve_date(ctx, entry_date)

    try:
        entry = service.add_entry(
            parsed_date,
            item_id,
            out_quantity=out_quantity,
            in_quantity=in_quantity,
            pending_quantity=pending_quantity,
        )
        click.echo(f"Added log entry {entry.id} for {entry.date.isoformat()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@log_group.command("update")
@click.argument("entry_id", type=int)
@click.option("--date", "entry_date", help="New pick-up date")
@click.option("--item", "item_id", type=int, help="New catalog item ID")
@click.option("--out", "out_quantity", type=int, help="New out quantity")
@click.option("--in", "in_quantity", type=int, help="New in quantity")
@click.option("--pending", "pending_quantity", type=int, help="New pending quantity")
@click.pass_context
def update_entry(ctx, entry_id: int, entry_date: str, item_id: int, out_quantity: int, in_quantity: int, pending_quantity: int):
    """Edit a log book entry; omitted options keep their value."""
    service = LogBookService(ctx.obj["db"])

    entry = service.get_entry(entry_id)
    if entry is None:
        click.echo(f"Error: Log entry {entry_id} not found", err=True)
        ctx.exit(1)

    try:
        updated = service.update_entry(
            entry_id,
            _resolve_date(ctx, entry_date) if entry_date else entry.date,
            item_id if item_id is not None else entry.item_id,
            out_quantity if out_quantity is not None else entry.out_quantity,
            in_quantity if in_quantity is not None else entry.in_quantity,
            pending_quantity if pending_quantity is not None else entry.pending_quantity,
        )
        click.echo(f"Updated log entry {updated.id} ({updated.status.value})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@log_group.command("delete")
@click.argument("entry_id", type=int)
@click.pass_context
def delete_entry(ctx, entry_id: int):
    """Delete a log book entry."""
    service = LogBookService(ctx.obj["db"])

    try:
        service.delete_entry(entry_id)
        click.echo(f"Deleted log entry {entry_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@log_group.command("return")
@click.argument("entry_id", type=int)
@click.argument("quantity", type=int)
@click.option("--image", "image_url", help="Reference to the proof-of-return image (path or URL)")
@click.pass_context
def record_return(ctx, entry_id: int, quantity: int, image_url: str):
    """Record QUANTITY returned pieces against a log entry.

    An image reference is required when the return closes out the
    pending quantity.
    """
    service = LogBookService(ctx.obj["db"])

    try:
        entry = service.record_return(entry_id, quantity, image_url=image_url)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Recorded return for log entry {entry.id}: "
        f"{entry.returned_quantity}/{entry.pending_quantity} returned ({entry.status.value})"
    )


def register_commands(cli):
    """Register log book commands with main CLI."""
    cli.add_command(log_group, name="log")
