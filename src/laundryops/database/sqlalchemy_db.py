"""Generic SQLAlchemy database implementation."""

from typing import Optional, Any
from datetime import date, datetime, UTC
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy import func

from laundryops.database.base import Database
from laundryops.database.models import (
    Category,
    Item,
    LogEntry,
    InvoiceOverride,
    LaundryService,
    GuestLaundryOrder,
    OrderLine,
    create_session_factory,
)
from laundryops.database.mappers import (
    category_to_domain,
    item_to_domain,
    log_entry_to_domain,
    invoice_override_to_domain,
    laundry_service_to_domain,
    order_to_domain,
)
from laundryops.domain.entities import (
    Category as DomainCategory,
    Item as DomainItem,
    LogEntry as DomainLogEntry,
    InvoiceOverride as DomainInvoiceOverride,
    LaundryService as DomainLaundryService,
    GuestLaundryOrder as DomainGuestLaundryOrder,
)
from laundryops.domain.errors import (
    NotFoundError,
    category_not_found,
    item_not_found,
    log_entry_not_found,
    order_not_found,
)

_ORDER_DETAIL_FIELDS = frozenset(
    {
        "guest_name",
        "room_number",
        "phone_number",
        "priority",
        "pickup_date",
        "delivery_date",
        "notes",
    }
)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db',
                'sqlite://' for an in-memory store, 'postgresql://...')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Category operations
    def create_category(
        self, code: str, name: str, description: str = "", status: str = "active"
    ) -> int:
        """Create a category. Returns category ID."""
        session = self._get_session()
        now = datetime.now(UTC)
        category = Category(
            code=code,
            name=name,
            description=description,
            status=status,
            created_at=now,
            updated_at=now,
        )
        session.add(category)
        session.commit()
        return category.id

    def get_category(self, category_id: int) -> Optional[DomainCategory]:
        """Get category by ID."""
        session = self._get_session()
        cat = session.query(Category).filter(Category.id == category_id).first()
        if cat is None:
            return None
        return category_to_domain(cat)

    def get_category_by_code(self, code: str) -> Optional[DomainCategory]:
        """Get category by code (case-insensitive)."""
        session = self._get_session()
        cat = (
            session.query(Category)
            .filter(func.lower(Category.code) == code.strip().lower())
            .first()
        )
        if cat is None:
            return None
        return category_to_domain(cat)

    def list_categories(self) -> list[DomainCategory]:
        """List all categories ordered by code."""
        session = self._get_session()
        categories = session.query(Category).order_by(Category.code, Category.id).all()
        return [category_to_domain(cat) for cat in categories]

    def update_category(
        self, category_id: int, code: str, name: str, description: str, status: str
    ) -> None:
        """Update category fields and refresh updated_at."""
        session = self._get_session()
        cat = session.query(Category).filter(Category.id == category_id).first()
        if cat is None:
            raise NotFoundError(category_not_found(category_id))
        cat.code = code
        cat.name = name
        cat.description = description
        cat.status = status
        cat.updated_at = datetime.now(UTC)
        session.commit()

    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        session = self._get_session()
        cat = session.query(Category).filter(Category.id == category_id).first()
        if cat is None:
            raise NotFoundError(category_not_found(category_id))
        session.delete(cat)
        session.commit()

    def count_items_in_category(self, category_name: str) -> int:
        """Count catalog items whose category name equals ``category_name``."""
        session = self._get_session()
        return session.query(Item).filter(Item.category == category_name).count()

    # Item operations
    def create_item(
        self, name: str, category: str, price: Decimal, item_id: Optional[int] = None
    ) -> int:
        """Create a catalog item. Returns item ID."""
        session = self._get_session()
        item = Item(name=name, category=category, price=price)
        if item_id is not None:
            item.id = item_id
        session.add(item)
        session.commit()
        return item.id

    def get_item(self, item_id: int) -> Optional[DomainItem]:
        """Get item by ID."""
        session = self._get_session()
        item = session.query(Item).filter(Item.id == item_id).first()
        if item is None:
            return None
        return item_to_domain(item)

    def list_items(self) -> list[DomainItem]:
        """List all items ordered by ID."""
        session = self._get_session()
        return [item_to_domain(item) for item in session.query(Item).order_by(Item.id).all()]

    def update_item(
        self,
        item_id: int,
        name: Optional[str] = None,
        category: Optional[str] = None,
        price: Optional[Decimal] = None,
    ) -> None:
        """Update item fields that are not None."""
        session = self._get_session()
        item = session.query(Item).filter(Item.id == item_id).first()
        if item is None:
            raise NotFoundError(item_not_found(item_id))
        if name is not None:
            item.name = name
        if category is not None:
            item.category = category
        if price is not None:
            item.price = price
        session.commit()

    def delete_item(self, item_id: int) -> None:
        """Delete an item."""
        session = self._get_session()
        item = session.query(Item).filter(Item.id == item_id).first()
        if item is None:
            raise NotFoundError(item_not_found(item_id))
        session.delete(item)
        session.commit()

    # Log book operations
    def get_max_log_entry_id(self) -> Optional[int]:
        """Return the highest log entry ID, or None when the log is empty."""
        session = self._get_session()
        return session.query(func.max(LogEntry.id)).scalar()

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
        session = self._get_session()
        entry = LogEntry(
            id=entry_id,
            date=date,
            item_id=item_id,
            out_quantity=out_quantity,
            in_quantity=in_quantity,
            pending_quantity=pending_quantity,
            returned_quantity=0,
        )
        session.add(entry)
        session.commit()
        return entry.id

    def get_log_entry(self, entry_id: int) -> Optional[DomainLogEntry]:
        """Get log entry by ID."""
        session = self._get_session()
        entry = session.query(LogEntry).filter(LogEntry.id == entry_id).first()
        if entry is None:
            return None
        return log_entry_to_domain(entry)

    def list_log_entries(self) -> list[DomainLogEntry]:
        """List log entries ordered by date, then ID."""
        session = self._get_session()
        entries = session.query(LogEntry).order_by(LogEntry.date, LogEntry.id).all()
        return [log_entry_to_domain(entry) for entry in entries]

    def _get_orm_log_entry(self, session: Session, entry_id: int) -> LogEntry:
        entry = session.query(LogEntry).filter(LogEntry.id == entry_id).first()
        if entry is None:
            raise NotFoundError(log_entry_not_found(entry_id))
        return entry

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
        session = self._get_session()
        entry = self._get_orm_log_entry(session, entry_id)
        entry.date = date
        entry.item_id = item_id
        entry.out_quantity = out_quantity
        entry.in_quantity = in_quantity
        entry.pending_quantity = pending_quantity
        session.commit()

    def update_log_entry_return(
        self,
        entry_id: int,
        returned_quantity: int,
        returned_image_url: Optional[str],
        returned_date: datetime,
    ) -> None:
        """Store the return tracking fields of a log entry."""
        session = self._get_session()
        entry = self._get_orm_log_entry(session, entry_id)
        entry.returned_quantity = returned_quantity
        entry.returned_image_url = returned_image_url
        entry.returned_date = returned_date
        session.commit()

    def delete_log_entry(self, entry_id: int) -> None:
        """Delete a log entry."""
        session = self._get_session()
        entry = self._get_orm_log_entry(session, entry_id)
        session.delete(entry)
        session.commit()

    # Invoice override operations
    def get_invoice_override(self, pickup_date: date) -> Optional[DomainInvoiceOverride]:
        """Get the manual edits stored for a pickup date."""
        session = self._get_session()
        override = session.get(InvoiceOverride, pickup_date)
        if override is None:
            return None
        return invoice_override_to_domain(override)

    def list_invoice_overrides(self) -> list[DomainInvoiceOverride]:
        """List all stored invoice overrides."""
        session = self._get_session()
        overrides = session.query(InvoiceOverride).order_by(InvoiceOverride.pickup_date).all()
        return [invoice_override_to_domain(o) for o in overrides]

    def save_invoice_override(
        self, pickup_date: date, invoice_no: Optional[str], return_date: Optional[date]
    ) -> None:
        """Insert or replace the manual edits for a pickup date."""
        session = self._get_session()
        override = session.get(InvoiceOverride, pickup_date)
        if override is None:
            override = InvoiceOverride(pickup_date=pickup_date)
            session.add(override)
        override.invoice_no = invoice_no
        override.return_date = return_date
        override.updated_at = datetime.now(UTC)
        session.commit()

    # Laundry service operations
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
        session = self._get_session()
        service = LaundryService(
            name=name,
            category=category,
            base_price=base_price,
            express_price=express_price,
            urgent_price=urgent_price,
            estimated_hours=estimated_hours,
        )
        session.add(service)
        session.commit()
        return service.id

    def get_laundry_service(self, service_id: int) -> Optional[DomainLaundryService]:
        """Get laundry service by ID."""
        session = self._get_session()
        service = session.query(LaundryService).filter(LaundryService.id == service_id).first()
        if service is None:
            return None
        return laundry_service_to_domain(service)

    def list_laundry_services(self) -> list[DomainLaundryService]:
        """List laundry services ordered by ID."""
        session = self._get_session()
        services = session.query(LaundryService).order_by(LaundryService.id).all()
        return [laundry_service_to_domain(s) for s in services]

    # Guest order operations
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
        """Create an order with its line items. Returns order ID."""
        session = self._get_session()
        now = datetime.now(UTC)
        order = GuestLaundryOrder(
            order_number=order_number,
            guest_name=guest_name,
            room_number=room_number,
            phone_number=phone_number,
            priority=priority,
            status="received",
            pickup_date=pickup_date,
            delivery_date=delivery_date,
            notes=notes,
            total_amount=total_amount,
            created_at=now,
            updated_at=now,
            created_by=created_by,
        )
        order.items = [OrderLine(**item) for item in items]
        session.add(order)
        session.commit()
        return order.id

    def _get_orm_order(self, session: Session, order_id: int) -> GuestLaundryOrder:
        order = session.query(GuestLaundryOrder).filter(GuestLaundryOrder.id == order_id).first()
        if order is None:
            raise NotFoundError(order_not_found(order_id))
        return order

    def get_order(self, order_id: int) -> Optional[DomainGuestLaundryOrder]:
        """Get order by ID."""
        session = self._get_session()
        order = session.query(GuestLaundryOrder).filter(GuestLaundryOrder.id == order_id).first()
        if order is None:
            return None
        return order_to_domain(order)

    def list_orders(self) -> list[DomainGuestLaundryOrder]:
        """List orders, newest first."""
        session = self._get_session()
        orders = (
            session.query(GuestLaundryOrder)
            .order_by(GuestLaundryOrder.created_at.desc(), GuestLaundryOrder.id.desc())
            .all()
        )
        return [order_to_domain(order) for order in orders]

    def list_order_numbers(self, prefix: str) -> list[str]:
        """List order numbers starting with ``prefix``."""
        session = self._get_session()
        rows = (
            session.query(GuestLaundryOrder.order_number)
            .filter(GuestLaundryOrder.order_number.startswith(prefix, autoescape=True))
            .all()
        )
        return [row[0] for row in rows]

    def update_order_status(
        self,
        order_id: int,
        status: str,
        updated_at: datetime,
        actual_delivery_date: Optional[datetime] = None,
    ) -> None:
        """Update order status; actual_delivery_date is only written when given."""
        session = self._get_session()
        order = self._get_orm_order(session, order_id)
        order.status = status
        order.updated_at = updated_at
        if actual_delivery_date is not None:
            order.actual_delivery_date = actual_delivery_date
        session.commit()

    def update_order_details(self, order_id: int, **fields: Any) -> None:
        """Update order header fields (guest, room, phone, dates, notes, priority)."""
        unknown = set(fields) - _ORDER_DETAIL_FIELDS
        if unknown:
            raise ValueError(f"Cannot update order fields: {', '.join(sorted(unknown))}")

        session = self._get_session()
        order = self._get_orm_order(session, order_id)
        for name, value in fields.items():
            setattr(order, name, value)
        order.updated_at = datetime.now(UTC)
        session.commit()

    def delete_order(self, order_id: int) -> None:
        """Delete an order and its line items."""
        session = self._get_session()
        order = self._get_orm_order(session, order_id)
        session.delete(order)
        session.commit()
