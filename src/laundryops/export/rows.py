"""Plain row records handed to the export writers."""

from datetime import datetime
from typing import Iterable, Optional

from laundryops.domain.entities import Category, GuestLaundryOrder, InvoiceEntry
from laundryops.utils.amount_parser import format_amount

CATEGORY_HEADERS = ("id", "code", "name", "description", "status", "createdAt", "updatedAt")
INVOICE_HEADERS = ("NO. INVOICE", "PICK UP DATE", "RETURN DATE", "TOTAL PRICE")
ORDER_HEADERS = (
    "ORDER NO.",
    "GUEST",
    "ROOM",
    "PHONE",
    "ITEMS",
    "TOTAL",
    "STATUS",
    "PRIORITY",
    "PICK UP DATE",
    "DELIVERY DATE",
)

NO_DATE = "-"


def _timestamp(value: Optional[datetime]) -> str:
    return value.isoformat() if value is not None else ""


def category_rows(categories: Iterable[Category]) -> list[tuple]:
    """Rows matching CATEGORY_HEADERS."""
    return [
        (
            cat.id,
            cat.code,
            cat.name,
            cat.description,
            cat.status.value,
            _timestamp(cat.created_at),
            _timestamp(cat.updated_at),
        )
        for cat in categories
    ]


def invoice_rows(invoices: Iterable[InvoiceEntry], raw_totals: bool = False) -> list[tuple]:
    """Rows matching INVOICE_HEADERS; a missing return date shows as "-".

    With ``raw_totals`` the total stays a Decimal so spreadsheet cells are
    numeric.
    """
    return [
        (
            inv.invoice_no,
            inv.pickup_date.isoformat(),
            inv.return_date.isoformat() if inv.return_date else NO_DATE,
            inv.total_price if raw_totals else format_amount(inv.total_price),
        )
        for inv in invoices
    ]


def order_rows(orders: Iterable[GuestLaundryOrder]) -> list[tuple]:
    """Rows matching ORDER_HEADERS."""
    return [
        (
            order.order_number,
            order.guest_name,
            order.room_number,
            order.phone_number,
            "; ".join(f"{item.name} x{item.quantity}" for item in order.items),
            format_amount(order.total_amount),
            order.status.value,
            order.priority.value,
            order.pickup_date.isoformat(),
            order.delivery_date.isoformat(),
        )
        for order in orders
    ]
