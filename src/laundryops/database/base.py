"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from laundryops.domain.entities import (
    Category,
    Item,
    LogEntry,
    InvoiceOverride,
    LaundryService,
    GuestLaundryOrder,
)


class Database(ABC):
    """Abstract database interface for laundryops.

    This is the repository seam: services only talk to this interface, so
    the SQLAlchemy store can be swapped without changing call sites.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, code: str, name: str, description: str = "", status: str = "active"
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_code(self, code: str) -> Optional[Category]:
        """Get category by code (case-insensitive)."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories ordered by code."""
        pass

    @abstractmethod
    def update_category(
        self, category_id: int, code: str, name: str, description: str, status: str
    ) -> None:
        """Update category fields and refresh updated_at."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def count_items_in_category(self, category_name: str) -> int:
        """Count catalog items whose category name equals ``category_name``."""
        pass

    # Item operations
    @abstractmethod
    def create_item(
        self, name: str, category: str, price: Decimal, item_id: Optional[int] = None
    ) -> int:
        """Create a catalog item. Returns item ID."""
        pass

    @abstractmethod
    def get_item(self, item_id: int) -> Optional[Item]:
        """Get item by ID."""
        pass

    @abstractmethod
    def list_items(self) -> list[Item]:
        """List all items ordered by ID."""
        pass

    @abstractmethod
    def update_item(
        self,
        item_id: int,
        name: Optional[str] = None,
        category: Optional[str] = None,
        price: Optional[Decimal] = None,
    ) -> None:
        """Update item fields that are not None."""
        pass

    @abstractmethod
    def delete_item(self, item_id: int) -> None:
        """Delete an item."""
        pass

    # Log book operations
    @abstractmethod
    def get_max_log_entry_id(self) -> Optional[int]:
        """Return the highest log entry ID, or None when the log is empty."""
        pass

    @abstractmethod
    def create_log_entry(
        self,
        entry_id: int,
        date: date,
        item_id: int,
        out_quantity: int,
        in_quantity: int,
        pending_quantity: int,
    ) -> int:
        """Create a log entry with an explicit ID. Returns the ID."""
        pass

    @abstractmethod
    def get_log_entry(self, entry_id: int) -> Optional[LogEntry]:
        """Get log entry by ID."""
        pass

    @abstractmethod
    def list_log_entries(self) -> list[LogEntry]:
        """List log entries ordered by date, then ID."""
        pass

    @abstractmethod
    def update_log_entry(
        self,
        entry_id: int,
        date: date,
        item_id: int,
        out_quantity: int,
        in_quantity: int,
        pending_quantity: int,
    ) -> None:
        """Update the editable fields of a log entry."""
        pass

    @abstractmethod
    def update_log_entry_return(
        self,
        entry_id: int,
        returned_quantity: int,
        returned_image_url: Optional[str],
        returned_date: datetime,
    ) -> None:
        """Store the return tracking fields of a log entry."""
        pass

    @abstractmethod
    def delete_log_entry(self, entry_id: int) -> None:
        """Delete a log entry."""
        pass

    # Invoice override operations
    @abstractmethod
    def get_invoice_override(self, pickup_date: date) -> Optional[InvoiceOverride]:
        """Get the manual edits stored for a pickup date."""
        pass

    @abstractmethod
    def list_invoice_overrides(self) -> list[InvoiceOverride]:
        """List all stored invoice overrides."""
        pass

    @abstractmethod
    def save_invoice_override(
        self, pickup_date: date, invoice_no: Optional[str], return_date: Optional[date]
    ) -> None:
        """Insert or replace the manual edits for a pickup date."""
        pass

    # Laundry service operations
    @abstractmethod
    def create_laundry_service(
        self,
        name: str,
        category: str,
        base_price: Decimal,
        express_price: Decimal,
        urgent_price: Decimal,
        estimated_hours: int,
    ) -> int:
        """Create a laundry service. Returns service ID."""
        pass

    @abstractmethod
    def get_laundry_service(self, service_id: int) -> Optional[LaundryService]:
        """Get laundry service by ID."""
        pass

    @abstractmethod
    def list_laundry_services(self) -> list[LaundryService]:
        """List laundry services ordered by ID."""
        pass

    # Guest order operations
    @abstractmethod
    def create_order(
        self,
        order_number: str,
        guest_name: str,
        room_number: str,
        phone_number: str,
        priority: str,
        pickup_date: date,
        delivery_date: date,
        notes: str,
        items: list[dict[str, Any]],
        total_amount: Decimal,
        created_by: Optional[str] = None,
    ) -> int:
        """Create an order with its line items. Returns order ID.

        Each item dict carries name, category, service, quantity,
        unit_price and total_price.
        """
        pass

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[GuestLaundryOrder]:
        """Get order by ID."""
        pass

    @abstractmethod
    def list_orders(self) -> list[GuestLaundryOrder]:
        """List orders, newest first."""
        pass

    @abstractmethod
    def list_order_numbers(self, prefix: str) -> list[str]:
        """List order numbers starting with ``prefix``."""
        pass

    @abstractmethod
    def update_order_status(
        self,
        order_id: int,
        status: str,
        updated_at: datetime,
        actual_delivery_date: Optional[datetime] = None,
    ) -> None:
        """Update order status; actual_delivery_date is only written when given."""
        pass

    @abstractmethod
    def update_order_details(self, order_id: int, **fields: Any) -> None:
        """Update order header fields (guest, room, phone, dates, notes, priority)."""
        pass

    @abstractmethod
    def delete_order(self, order_id: int) -> None:
        """Delete an order and its line items."""
        pass
