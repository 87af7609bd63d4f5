"""Guest laundry order commands."""

import click
from laundryops.cli.error_handling import check_access, handle_domain_error
from laundryops.domain.access import GUEST_LAUNDRY, GUEST_LAUNDRY_DELETE
from laundryops.domain.entities import (
    DEFAULT_ITEM_SERVICE,
    GuestLaundryOrder,
    OrderItemRequest,
    OrderPriority,
    OrderStatus,
)
from laundryops.domain.errors import ExportError
from laundryops.domain.guest_laundry import ALL, GuestLaundryService
from laundryops.export import ExportService
from laundryops.utils.amount_parser import format_rupiah

STATUS_CHOICES = [s.value for s in OrderStatus]
PRIORITY_CHOICES = [p.value for p in OrderPriority]


def parse_item_option(value: str, service: str = DEFAULT_ITEM_SERVICE) -> OrderItemRequest:
    """Parse ``SERVICE_ID[:QTY]`` into an order item request.

    Raises:
        click.BadParameter: If the value is malformed
    """
    service_id, _, quantity = value.partition(":")
    try:
        return OrderItemRequest(
            service_id=int(service_id),
            quantity=int(quantity) if quantity else 1,
            service=service,
        )
    except ValueError:
        raise click.BadParameter(f"Expected SERVICE_ID[:QTY], got '{value}'", param_hint="--item")


def print_order(order: GuestLaundryOrder) -> None:
    """Print the full detail of one order."""
    click.echo(f"\nOrder {order.order_number} (ID: {order.id})")
    click.echo(f"  Guest: {order.guest_name}")
    click.echo(f"  Room: {order.room_number}")
    if order.phone_number:
        click.echo(f"  Phone: {order.phone_number}")
    click.echo(f"  Status: {order.status.value}")
    click.echo(f"  Priority: {order.priority.value}")
    click.echo(f"  Pick up: {order.pickup_date.isoformat()}")
    click.echo(f"  Delivery: {order.delivery_date.isoformat()}")
    if order.actual_delivery_date:
        click.echo(f"  Delivered at: {order.actual_delivery_date.strftime('%Y-%m-%d %H:%M')}")
    if order.notes:
        click.echo(f"  Notes: {order.notes}")
    click.echo("  Items:")
    for line in order.items:
        click.echo(
            f"    {line.quantity} x {line.name} ({line.service}) @ "
            f"{format_rupiah(line.unit_price)} = {format_rupiah(line.total_price)}"
        )
    click.echo(f"  Total: {format_rupiah(order.total_amount)}")


@click.group()
@click.pass_context
def order_group(ctx):
    """Manage guest laundry orders."""
    check_access(ctx, GUEST_LAUNDRY)


@order_group.command("list")
@click.option("--search", "term", default="", help="Match guest name, room or order number")
@click.option("--status", type=click.Choice([ALL] + STATUS_CHOICES, case_sensitive=False), default=ALL, help="Filter by status")
@click.option("--priority", type=click.Choice([ALL] + PRIORITY_CHOICES, case_sensitive=False), default=ALL, help="Filter by priority")
@click.pass_context
def list_orders(ctx, term: str, status: str, priority: str):
    """List orders, newest first."""
    service = GuestLaundryService(ctx.obj["db"])

    orders = service.search_orders(term, status=status.lower(), priority=priority.lower())
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(
        f"\n{'ID':<5} {'Order No.':<13} {'Guest':<20} {'Room':<6} {'Status':<12} "
        f"{'Priority':<9} {'Delivery':<11} {'Total':>12}"
    )
    click.echo("-" * 95)
    for order in orders:
        click.echo(
            f"{order.id:<5} {order.order_number:<13} {order.guest_name[:20]:<20} "
            f"{order.room_number:<6} {order.status.value:<12} {order.priority.value:<9} "
            f"{order.delivery_date.isoformat():<11} {format_rupiah(order.total_amount):>12}"
        )


@order_group.command("show")
@click.argument("order_id", type=int)
@click.pass_context
def show_order(ctx, order_id: int):
    """Show one order with its items."""
    service = GuestLaundryService(ctx.obj["db"])

    order = service.get_order(order_id)
    if order is None:
        click.echo(f"Error: Order {order_id} not found", err=True)
        ctx.exit(1)
    print_order(order)


@order_group.command("create")
@click.option("--guest", "guest_name", required=True, help="Guest name")
@click.option("--room", "room_number", required=True, help="Room number")
@click.option("--phone", "phone_number", default="", help="Phone number")
@click.option("--priority", type=click.Choice(PRIORITY_CHOICES, case_sensitive=False), default="normal", help="Priority tier (default: normal)")
@click.option("--pickup", "pickup_date", required=True, help="Pick-up date (YYYY-MM-DD)")
@click.option("--delivery", "delivery_date", required=True, help="Promised delivery date (YYYY-MM-DD)")
@click.option("--item", "items", multiple=True, required=True, help="SERVICE_ID[:QTY]; repeat for more items")
@click.option("--service-type", default=DEFAULT_ITEM_SERVICE, show_default=True, help="Service applied to the items")
@click.option("--notes", default="", help="Free-text notes")
@click.pass_context
def create_order(ctx, guest_name: str, room_number: str, phone_number: str, priority: str, pickup_date: str, delivery_date: str, items: tuple, service_type: str, notes: str):
    """Create a guest laundry order."""
    service = GuestLaundryService(ctx.obj["db"])
    requests = [parse_item_option(value, service_type) for value in items]

    try:
        order = service.create_order(
            guest_name=guest_name,
            room_number=room_number,
            phone_number=phone_number,
            priority=priority,
            pickup_date=pickup_date,
            delivery_date=delivery_date,
            items=requests,
            notes=notes,
            created_by=ctx.obj["role"].value,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Created order {order.order_number} (ID: {order.id}) "
        f"total {format_rupiah(order.total_amount)}"
    )


@order_group.command("update")
@click.argument("order_id", type=int)
@click.option("--guest", "guest_name", help="Guest name")
@click.option("--room", "room_number", help="Room number")
@click.option("--phone", "phone_number", help="Phone number")
@click.option("--pickup", "pickup_date", help="Pick-up date (YYYY-MM-DD)")
@click.option("--delivery", "delivery_date", help="Delivery date (YYYY-MM-DD)")
@click.option("--notes", help="Free-text notes")
@click.pass_context
def update_order(ctx, order_id: int, guest_name: str, room_number: str, phone_number: str, pickup_date: str, delivery_date: str, notes: str):
    """Edit an order's guest and scheduling details."""
    service = GuestLaundryService(ctx.obj["db"])

    try:
        order = service.update_order_details(
            order_id,
            guest_name=guest_name,
            room_number=room_number,
            phone_number=phone_number,
            pickup_date=pickup_date,
            delivery_date=delivery_date,
            notes=notes,
        )
        click.echo(f"Updated order {order.order_number}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@order_group.command("status")
@click.argument("order_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.pass_context
def update_status(ctx, order_id: int, status: str):
    """Move an order to STATUS."""
    service = GuestLaundryService(ctx.obj["db"])

    try:
        order = service.update_status(order_id, status)
        click.echo(f"Order {order.order_number} is now {order.status.value}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@order_group.command("delete")
@click.argument("order_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_order(ctx, order_id: int, yes: bool):
    """Delete an order and its items."""
    check_access(ctx, GUEST_LAUNDRY_DELETE)
    service = GuestLaundryService(ctx.obj["db"])

    if not yes:
        click.confirm(f"Delete order {order_id}?", abort=True)

    try:
        service.delete_order(order_id)
        click.echo(f"Deleted order {order_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@order_group.command("stats")
@click.pass_context
def order_stats(ctx):
    """Show order totals and revenue."""
    stats = GuestLaundryService(ctx.obj["db"]).statistics()

    click.echo(f"Total orders: {stats.total_orders}")
    click.echo(f"Active orders: {stats.active_orders}")
    click.echo(f"Completed orders: {stats.completed_orders}")
    click.echo(f"Revenue: {format_rupiah(stats.total_revenue)}")


@order_group.command("services")
@click.pass_context
def list_services(ctx):
    """List laundry services with their prices per priority."""
    services = GuestLaundryService(ctx.obj["db"]).list_services()
    if not services:
        click.echo("No laundry services found. Run 'seed' to create the default price list.")
        return

    click.echo(
        f"\n{'ID':<4} {'Service':<16} {'Category':<10} {'Normal':>11} {'Express':>11} "
        f"{'Urgent':>11} {'Hours':>6}"
    )
    click.echo("-" * 75)
    for svc in services:
        click.echo(
            f"{svc.id:<4} {svc.name:<16} {svc.category:<10} "
            f"{format_rupiah(svc.base_price):>11} {format_rupiah(svc.express_price):>11} "
            f"{format_rupiah(svc.urgent_price):>11} {svc.estimated_hours:>6}"
        )


@order_group.command("export")
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--search", "term", default="", help="Match guest name, room or order number")
@click.option("--status", type=click.Choice([ALL] + STATUS_CHOICES, case_sensitive=False), default=ALL)
@click.option("--priority", type=click.Choice([ALL] + PRIORITY_CHOICES, case_sensitive=False), default=ALL)
@click.pass_context
def export_orders(ctx, output: str, term: str, status: str, priority: str):
    """Export the filtered orders to a CSV file."""
    service = ExportService(ctx.obj["db"])

    try:
        path = service.export_orders(output, term, status=status.lower(), priority=priority.lower())
        click.echo(f"Exported orders to {path}")
    except ExportError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register order commands with main CLI."""
    cli.add_command(order_group, name="order")
