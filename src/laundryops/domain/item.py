"""Catalog item domain service."""

import logging
from decimal import Decimal
from typing import Optional

from laundryops.database.base import Database
from laundryops.domain.entities import Item as ItemEntity, UNKNOWN_ITEM_NAME
from laundryops.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    item_not_found,
)

_log = logging.getLogger(__name__)


def _check_price(price: Decimal) -> Decimal:
    price = Decimal(price)
    if not price.is_finite():
        raise ValidationError(f"Price must be a number: {price}")
    if price < 0:
        raise ValidationError(f"Price cannot be negative: {price}")
    return price


class ItemService:
    """Service for the linen item catalog and its price table."""

    def __init__(self, db: Database):
        """Initialize item service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_item(
        self,
        name: str,
        category: str,
        price: Decimal,
        item_id: Optional[int] = None,
    ) -> int:
        """Create a catalog item.

        Args:
            name: Item name (e.g., "Bath Towel Baru")
            category: Category name the item belongs to
            price: Unit price
            item_id: Optional explicit ID, used when seeding the fixed catalog

        Returns:
            Item ID

        Raises:
            ValidationError: If name is empty or price is negative
            ConflictError: If ``item_id`` is already taken
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Item name is required")
        price = _check_price(price)
        if item_id is not None and self.db.get_item(item_id) is not None:
            raise ConflictError(f"Item ID {item_id} is already in use")

        new_id = self.db.create_item(
            name=name, category=(category or "").strip(), price=price, item_id=item_id
        )
        _log.info("Created item %r id=%s price=%s", name, new_id, price)
        return new_id

    def get_item(self, item_id: int) -> Optional[ItemEntity]:
        """Get item by ID."""
        return self.db.get_item(item_id)

    def list_items(self) -> list[ItemEntity]:
        """List all catalog items."""
        return self.db.list_items()

    def update_item(
        self,
        item_id: int,
        name: Optional[str] = None,
        category: Optional[str] = None,
        price: Optional[Decimal] = None,
    ) -> None:
        """Update item fields that are not None.

        Raises:
            NotFoundError: If the item does not exist
            ValidationError: If name is empty or price is negative
        """
        if self.db.get_item(item_id) is None:
            raise NotFoundError(item_not_found(item_id))
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Item name is required")
        if price is not None:
            price = _check_price(price)

        self.db.update_item(item_id, name=name, category=category, price=price)
        _log.info("Updated item id=%s", item_id)

    def delete_item(self, item_id: int) -> None:
        """Delete an item.

        Log entries that reference the item are left alone; they display as
        "Unknown Item" and price at zero on invoices.
        """
        if self.db.get_item(item_id) is None:
            raise NotFoundError(item_not_found(item_id))
        self.db.delete_item(item_id)
        _log.info("Deleted item id=%s", item_id)

    def get_item_name(self, item_id: int) -> str:
        item = self.db.get_item(item_id)
        return item.name if item is not None else UNKNOWN_ITEM_NAME

    def price_table(self) -> dict[int, Decimal]:
        """Map of item ID to unit price, as used by invoice aggregation."""
        return {item.id: item.price for item in self.db.list_items()}
