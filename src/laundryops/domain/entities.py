"""Domain model entities for laundryops.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these types; the ORM
models in ``laundryops.database.models`` are mapped onto them.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


UNKNOWN_ITEM_NAME = "Unknown Item"
DEFAULT_ITEM_SERVICE = "Wash & Iron"


class CategoryStatus(str, Enum):
    """Category visibility status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class ReturnStatus(str, Enum):
    """Return tracking state derived from log entry quantities."""

    PENDING = "pending"
    COMPLETED = "completed"


class OrderStatus(str, Enum):
    """Guest laundry order workflow status."""

    RECEIVED = "received"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderPriority(str, Enum):
    """Guest laundry order priority; selects the unit price tier."""

    NORMAL = "normal"
    EXPRESS = "express"
    URGENT = "urgent"


@dataclass(frozen=True)
class Category:
    """Item category domain entity."""

    id: int
    code: str
    name: str
    description: str
    status: CategoryStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Item:
    """Catalog item with its unit price.

    ``category`` holds the category *name*; it is a display link, not a
    foreign key.
    """

    id: int
    name: str
    category: str
    price: Decimal
    created_at: datetime


@dataclass(frozen=True)
class LogEntry:
    """One pick-up record in the daily log book."""

    id: int
    date: date
    item_id: int
    out_quantity: int
    in_quantity: int
    pending_quantity: int
    returned_quantity: int = 0
    returned_image_url: Optional[str] = None
    returned_date: Optional[datetime] = None

    @property
    def remaining_quantity(self) -> int:
        """Pending quantity still waiting to be returned."""
        return self.pending_quantity - self.returned_quantity

    @property
    def status(self) -> ReturnStatus:
        if self.returned_quantity >= self.pending_quantity:
            return ReturnStatus.COMPLETED
        return ReturnStatus.PENDING


@dataclass(frozen=True)
class InvoiceEntry:
    """Invoice derived from all log entries sharing a pickup date."""

    invoice_no: str
    pickup_date: date
    return_date: Optional[date]
    total_price: Decimal
    log_entry_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class InvoiceOverride:
    """Manual invoice edits, keyed by pickup date."""

    pickup_date: date
    invoice_no: Optional[str]
    return_date: Optional[date]
    updated_at: datetime


@dataclass(frozen=True)
class LaundryService:
    """Guest laundry service with a price per priority tier."""

    id: int
    name: str
    category: str
    base_price: Decimal
    express_price: Decimal
    urgent_price: Decimal
    estimated_hours: int


@dataclass(frozen=True)
class LaundryItem:
    """Line item on a guest laundry order."""

    id: int
    name: str
    category: str
    service: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


@dataclass(frozen=True)
class GuestLaundryOrder:
    """Guest laundry order domain entity."""

    id: int
    order_number: str
    guest_name: str
    room_number: str
    phone_number: str
    items: tuple[LaundryItem, ...]
    total_amount: Decimal
    status: OrderStatus
    priority: OrderPriority
    pickup_date: date
    delivery_date: date
    notes: str
    created_at: datetime
    updated_at: datetime
    actual_delivery_date: Optional[datetime] = None
    created_by: Optional[str] = None


@dataclass(frozen=True)
class OrderItemRequest:
    """Requested order line: which service and how many pieces."""

    service_id: int
    quantity: int = 1
    service: str = DEFAULT_ITEM_SERVICE


@dataclass(frozen=True)
class OrderStatistics:
    """Headline numbers for the guest laundry overview."""

    total_orders: int
    active_orders: int
    completed_orders: int
    total_revenue: Decimal


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a sequential bulk import."""

    imported: int = 0
    failed: int = 0
    errors: tuple[str, ...] = field(default_factory=tuple)
