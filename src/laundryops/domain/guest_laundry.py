"""Guest laundry order domain service."""

import logging
import re
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Iterable, Optional

from laundryops.database.base import Database
from laundryops.domain.entities import (
    GuestLaundryOrder as OrderEntity,
    LaundryService as LaundryServiceEntity,
    OrderItemRequest,
    OrderPriority,
    OrderStatistics,
    OrderStatus,
)
from laundryops.domain.errors import (
    NotFoundError,
    ValidationError,
    order_not_found,
    service_not_found,
)
from laundryops.utils.date_parser import parse_iso_date

_log = logging.getLogger(__name__)

ALL = "all"

ACTIVE_STATUSES = frozenset({OrderStatus.RECEIVED, OrderStatus.IN_PROGRESS})
DONE_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.DELIVERED})


def parse_status(value: "str | OrderStatus") -> OrderStatus:
    try:
        return OrderStatus(value.strip().lower() if isinstance(value, str) else value)
    except ValueError:
        raise ValidationError(
            f"Invalid order status '{value}'. Expected one of: "
            + ", ".join(s.value for s in OrderStatus)
        )


def parse_priority(value: "str | OrderPriority") -> OrderPriority:
    try:
        return OrderPriority(value.strip().lower() if isinstance(value, str) else value)
    except ValueError:
        raise ValidationError(
            f"Invalid order priority '{value}'. Expected one of: "
            + ", ".join(p.value for p in OrderPriority)
        )


def price_for(service: LaundryServiceEntity, priority: "str | OrderPriority") -> Decimal:
    """Unit price of a service for a priority tier."""
    priority = parse_priority(priority)
    if priority == OrderPriority.EXPRESS:
        return service.express_price
    if priority == OrderPriority.URGENT:
        return service.urgent_price
    return service.base_price


def _required(value: Optional[str], label: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} is required")
    return value


def _order_date(value: "str | date", label: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {label}: {e}")


class GuestLaundryService:
    """Service for guest laundry orders and the service price list."""

    def __init__(self, db: Database):
        """Initialize guest laundry service.

        Args:
            db: Database instance
        """
        self.db = db

    # Price list
    def list_services(self) -> list[LaundryServiceEntity]:
        """List available laundry services."""
        return self.db.list_laundry_services()

    def get_service(self, service_id: int) -> Optional[LaundryServiceEntity]:
        """Get a laundry service by ID."""
        return self.db.get_laundry_service(service_id)

    def create_service(
        self,
        name: str,
        category: str,
        base_price: Decimal,
        express_price: Decimal,
        urgent_price: Decimal,
        estimated_hours: int,
    ) -> int:
        """Add a laundry service to the price list."""
        name = _required(name, "Service name")
        for label, price in (
            ("Base price", base_price),
            ("Express price", express_price),
            ("Urgent price", urgent_price),
        ):
            if Decimal(price) < 0:
                raise ValidationError(f"{label} cannot be negative")
        service_id = self.db.create_laundry_service(
            name=name,
            category=(category or "").strip(),
            base_price=Decimal(base_price),
            express_price=Decimal(express_price),
            urgent_price=Decimal(urgent_price),
            estimated_hours=estimated_hours,
        )
        _log.info("Created laundry service %r id=%s", name, service_id)
        return service_id

    # Orders
    def next_order_number(self, year: Optional[int] = None) -> str:
        """Next ``GL-YYYY-NNN`` number: highest sequence for the year + 1."""
        year = year if year is not None else datetime.now(UTC).year
        prefix = f"GL-{year}-"
        pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
        highest = 0
        for number in self.db.list_order_numbers(prefix):
            match = pattern.match(number)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"{prefix}{highest + 1:03d}"

    def create_order(
        self,
        guest_name: str,
        room_number: str,
        phone_number: str,
        priority: "str | OrderPriority",
        pickup_date: "str | date",
        delivery_date: "str | date",
        items: Iterable[OrderItemRequest],
        notes: str = "",
        created_by: Optional[str] = None,
    ) -> OrderEntity:
        """Create a guest laundry order.

        Line prices come from the service price list at the order's
        priority tier. New orders start as "received".

        Raises:
            ValidationError: If guest or room is empty, the priority or a
                date is invalid, a quantity is below 1, or no items are given
            NotFoundError: If an item references an unknown service
        """
        guest_name = _required(guest_name, "Guest name")
        room_number = _required(room_number, "Room number")
        priority = parse_priority(priority)
        pickup = _order_date(pickup_date, "pickup date")
        delivery = _order_date(delivery_date, "delivery date")

        requests = list(items)
        if not requests:
            _log.warning("Rejected order for %r: no items", guest_name)
            raise ValidationError("Add at least one laundry item to the order")

        lines = []
        for request in requests:
            if request.quantity < 1:
                raise ValidationError(f"Quantity must be at least 1, got {request.quantity}")
            service = self.db.get_laundry_service(request.service_id)
            if service is None:
                raise NotFoundError(service_not_found(request.service_id))
            unit_price = price_for(service, priority)
            lines.append(
                {
                    "name": service.name,
                    "category": service.category,
                    "service": request.service,
                    "quantity": request.quantity,
                    "unit_price": unit_price,
                    "total_price": unit_price * request.quantity,
                }
            )

        total = sum((line["total_price"] for line in lines), Decimal("0"))
        order_number = self.next_order_number()
        order_id = self.db.create_order(
            order_number=order_number,
            guest_name=guest_name,
            room_number=room_number,
            phone_number=(phone_number or "").strip(),
            priority=priority.value,
            pickup_date=pickup,
            delivery_date=delivery,
            notes=(notes or "").strip(),
            items=lines,
            total_amount=total,
            created_by=created_by,
        )
        _log.info("Created order %s id=%s total=%s", order_number, order_id, total)
        return self.db.get_order(order_id)

    def get_order(self, order_id: int) -> Optional[OrderEntity]:
        """Get order by ID."""
        return self.db.get_order(order_id)

    def _require_order(self, order_id: int) -> OrderEntity:
        order = self.db.get_order(order_id)
        if order is None:
            raise NotFoundError(order_not_found(order_id))
        return order

    def list_orders(self) -> list[OrderEntity]:
        """List all orders, newest first."""
        return self.db.list_orders()

    def search_orders(
        self,
        term: str = "",
        status: "str | OrderStatus" = ALL,
        priority: "str | OrderPriority" = ALL,
    ) -> list[OrderEntity]:
        """Filter orders by search term, status and priority.

        The term is a case-insensitive substring match on guest name, room
        number or order number. Status and priority match exactly unless
        "all".
        """
        term = (term or "").strip().lower()
        wanted_status = None if status == ALL else parse_status(status)
        wanted_priority = None if priority == ALL else parse_priority(priority)

        result = []
        for order in self.db.list_orders():
            if term and not (
                term in order.guest_name.lower()
                or term in order.room_number.lower()
                or term in order.order_number.lower()
            ):
                continue
            if wanted_status is not None and order.status != wanted_status:
                continue
            if wanted_priority is not None and order.priority != wanted_priority:
                continue
            result.append(order)
        return result

    def update_status(
        self,
        order_id: int,
        status: "str | OrderStatus",
        now: Optional[datetime] = None,
    ) -> OrderEntity:
        """Change an order's status.

        Moving to "delivered" stamps the actual delivery date; other
        statuses keep whatever delivery date was recorded before.
        """
        self._require_order(order_id)
        new_status = parse_status(status)
        now = now if now is not None else datetime.now(UTC)

        self.db.update_order_status(
            order_id,
            status=new_status.value,
            updated_at=now,
            actual_delivery_date=now if new_status == OrderStatus.DELIVERED else None,
        )
        _log.info("Order id=%s status -> %s", order_id, new_status.value)
        return self.db.get_order(order_id)

    def update_order_details(
        self,
        order_id: int,
        guest_name: Optional[str] = None,
        room_number: Optional[str] = None,
        phone_number: Optional[str] = None,
        pickup_date: "str | date | None" = None,
        delivery_date: "str | date | None" = None,
        notes: Optional[str] = None,
    ) -> OrderEntity:
        """Edit an order's guest and scheduling details.

        Line items and priority are fixed once an order is created, since
        they determine the charged amount.
        """
        self._require_order(order_id)
        fields = {}
        if guest_name is not None:
            fields["guest_name"] = _required(guest_name, "Guest name")
        if room_number is not None:
            fields["room_number"] = _required(room_number, "Room number")
        if phone_number is not None:
            fields["phone_number"] = phone_number.strip()
        if pickup_date is not None:
            fields["pickup_date"] = _order_date(pickup_date, "pickup date")
        if delivery_date is not None:
            fields["delivery_date"] = _order_date(delivery_date, "delivery date")
        if notes is not None:
            fields["notes"] = notes.strip()

        if fields:
            self.db.update_order_details(order_id, **fields)
            _log.info("Updated order id=%s fields=%s", order_id, sorted(fields))
        return self.db.get_order(order_id)

    def delete_order(self, order_id: int) -> None:
        """Delete an order and its items."""
        self._require_order(order_id)
        self.db.delete_order(order_id)
        _log.info("Deleted order id=%s", order_id)

    def statistics(self) -> OrderStatistics:
        """Totals across all orders; revenue counts completed and delivered."""
        orders = self.db.list_orders()
        done = [order for order in orders if order.status in DONE_STATUSES]
        return OrderStatistics(
            total_orders=len(orders),
            active_orders=sum(1 for order in orders if order.status in ACTIVE_STATUSES),
            completed_orders=len(done),
            total_revenue=sum((order.total_amount for order in done), Decimal("0")),
        )
