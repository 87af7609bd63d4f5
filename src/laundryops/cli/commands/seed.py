"""Seed the default catalog and price lists."""

from decimal import Decimal

import click
from laundryops.cli.error_handling import check_access
from laundryops.domain.access import ITEMS
from laundryops.domain.category import CategoryService
from laundryops.domain.guest_laundry import GuestLaundryService
from laundryops.domain.item import ItemService


# (code, name, description)
DEFAULT_CATEGORIES = [
    ("LIN", "Linen", "Hotel room and restaurant linen"),
    ("CLO", "Clothing", "Guest garments"),
    ("FRM", "Formal", "Suits and formal wear"),
]

# Fixed linen catalog used by the log book; IDs 1..18 in this order
DEFAULT_ITEMS = [
    ("Bath Towel Baru", "Linen", Decimal("6000")),
    ("Bath Towel Lama", "Linen", Decimal("5000")),
    ("Bath Mat", "Linen", Decimal("3500")),
    ("Bed Sheet Single", "Linen", Decimal("7000")),
    ("Bed Sheet Double", "Linen", Decimal("8500")),
    ("Duvet Cover Single", "Linen", Decimal("9000")),
    ("Duvet Cover Double", "Linen", Decimal("11000")),
    ("Pillow Case Baru", "Linen", Decimal("2500")),
    ("Pillow Case Lama", "Linen", Decimal("2000")),
    ("Pillow Case (MIX)", "Linen", Decimal("2000")),
    ("Inner Duvet Single", "Linen", Decimal("15000")),
    ("Inner Duvet Double", "Linen", Decimal("18000")),
    ("Skarting Duvet Single", "Linen", Decimal("8000")),
    ("Skarting Duvet Double", "Linen", Decimal("10000")),
    ("Napkin", "Linen", Decimal("1500")),
    ("Cover Chair", "Linen", Decimal("4000")),
    ("Table Cloth", "Linen", Decimal("7500")),
    ("Bath Robe", "Linen", Decimal("12000")),
]

# (name, category, base, express, urgent, estimated hours)
DEFAULT_SERVICES = [
    ("Shirt", "Clothing", Decimal("15000"), Decimal("22500"), Decimal("30000"), 24),
    ("Pants/Trousers", "Clothing", Decimal("18000"), Decimal("27000"), Decimal("36000"), 24),
    ("Dress", "Clothing", Decimal("25000"), Decimal("37500"), Decimal("50000"), 48),
    ("Suit Jacket", "Formal", Decimal("35000"), Decimal("52500"), Decimal("70000"), 48),
    ("Bed Sheet", "Linen", Decimal("20000"), Decimal("30000"), Decimal("40000"), 12),
    ("Towel", "Linen", Decimal("8000"), Decimal("12000"), Decimal("16000"), 8),
    ("Curtain", "Linen", Decimal("30000"), Decimal("45000"), Decimal("60000"), 72),
    ("Blanket", "Linen", Decimal("25000"), Decimal("37500"), Decimal("50000"), 48),
]


@click.command("seed")
@click.pass_context
def seed(ctx):
    """Create default categories, the linen catalog and laundry services.

    Each group is skipped when it already has data.
    """
    check_access(ctx, ITEMS)
    db = ctx.obj["db"]
    category_service = CategoryService(db)
    item_service = ItemService(db)
    laundry = GuestLaundryService(db)

    created = 0
    errors = 0

    if category_service.list_categories():
        click.echo("Categories already exist, skipping.")
    else:
        for code, name, description in DEFAULT_CATEGORIES:
            try:
                category_service.create_category(code=code, name=name, description=description)
                created += 1
            except ValueError as e:
                click.echo(f"Warning: Could not create category '{name}': {e}", err=True)
                errors += 1

    if item_service.list_items():
        click.echo("Items already exist, skipping.")
    else:
        for item_id, (name, category, price) in enumerate(DEFAULT_ITEMS, start=1):
            item_service.create_item(name=name, category=category, price=price, item_id=item_id)
            created += 1

    if laundry.list_services():
        click.echo("Laundry services already exist, skipping.")
    else:
        for name, category, base, express, urgent, hours in DEFAULT_SERVICES:
            laundry.create_service(name, category, base, express, urgent, hours)
            created += 1

    if errors == 0:
        click.echo(f"Successfully created {created} records.")
    else:
        click.echo(f"Created {created} records with {errors} errors.")


def register_commands(cli):
    """Register seed command with main CLI."""
    cli.add_command(seed)
