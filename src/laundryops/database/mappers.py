"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the schema can change without
touching the domain services.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from laundryops.domain import entities as domain
from laundryops.database.models import (
    Category as ORMCategory,
    Item as ORMItem,
    LogEntry as ORMLogEntry,
    InvoiceOverride as ORMInvoiceOverride,
    LaundryService as ORMLaundryService,
    GuestLaundryOrder as ORMGuestLaundryOrder,
    OrderLine as ORMOrderLine,
)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored timestamps are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _money(value) -> Decimal:
    return Decimal(value) if value is not None else Decimal("0")


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        code=orm_category.code,
        name=orm_category.name,
        description=orm_category.description or "",
        status=domain.CategoryStatus(orm_category.status),
        created_at=_aware(orm_category.created_at),
        updated_at=_aware(orm_category.updated_at),
    )


def item_to_domain(orm_item: ORMItem) -> domain.Item:
    """Convert SQLAlchemy Item model to domain Item entity."""
    return domain.Item(
        id=orm_item.id,
        name=orm_item.name,
        category=orm_item.category or "",
        price=_money(orm_item.price),
        created_at=_aware(orm_item.created_at),
    )


def log_entry_to_domain(orm_entry: ORMLogEntry) -> domain.LogEntry:
    """Convert SQLAlchemy LogEntry model to domain LogEntry entity."""
    return domain.LogEntry(
        id=orm_entry.id,
        date=orm_entry.date,
        item_id=orm_entry.item_id,
        out_quantity=orm_entry.out_quantity,
        in_quantity=orm_entry.in_quantity,
        pending_quantity=orm_entry.pending_quantity,
        returned_quantity=orm_entry.returned_quantity or 0,
        returned_image_url=orm_entry.returned_image_url,
        returned_date=_aware(orm_entry.returned_date),
    )


def invoice_override_to_domain(
    orm_override: ORMInvoiceOverride,
) -> domain.InvoiceOverride:
    """Convert SQLAlchemy InvoiceOverride model to domain InvoiceOverride."""
    return domain.InvoiceOverride(
        pickup_date=orm_override.pickup_date,
        invoice_no=orm_override.invoice_no,
        return_date=orm_override.return_date,
        updated_at=_aware(orm_override.updated_at),
    )


def laundry_service_to_domain(orm_service: ORMLaundryService) -> domain.LaundryService:
    """Convert SQLAlchemy LaundryService model to domain LaundryService."""
    return domain.LaundryService(
        id=orm_service.id,
        name=orm_service.name,
        category=orm_service.category,
        base_price=_money(orm_service.base_price),
        express_price=_money(orm_service.express_price),
        urgent_price=_money(orm_service.urgent_price),
        estimated_hours=orm_service.estimated_hours,
    )


def order_line_to_domain(orm_line: ORMOrderLine) -> domain.LaundryItem:
    """Convert SQLAlchemy OrderLine model to domain LaundryItem."""
    return domain.LaundryItem(
        id=orm_line.id,
        name=orm_line.name,
        category=orm_line.category,
        service=orm_line.service,
        quantity=orm_line.quantity,
        unit_price=_money(orm_line.unit_price),
        total_price=_money(orm_line.total_price),
    )


def order_to_domain(orm_order: ORMGuestLaundryOrder) -> domain.GuestLaundryOrder:
    """Convert SQLAlchemy GuestLaundryOrder model to domain entity."""
    return domain.GuestLaundryOrder(
        id=orm_order.id,
        order_number=orm_order.order_number,
        guest_name=orm_order.guest_name,
        room_number=orm_order.room_number,
        phone_number=orm_order.phone_number or "",
        items=tuple(order_line_to_domain(line) for line in orm_order.items),
        total_amount=_money(orm_order.total_amount),
        status=domain.OrderStatus(orm_order.status),
        priority=domain.OrderPriority(orm_order.priority),
        pickup_date=orm_order.pickup_date,
        delivery_date=orm_order.delivery_date,
        notes=orm_order.notes or "",
        created_at=_aware(orm_order.created_at),
        updated_at=_aware(orm_order.updated_at),
        actual_delivery_date=_aware(orm_order.actual_delivery_date),
        created_by=orm_order.created_by,
    )
