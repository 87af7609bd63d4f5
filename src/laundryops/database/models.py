"""SQLAlchemy models for laundryops database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Category(Base):
    """Item category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default="active")
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, nullable=False)


class Item(Base):
    """Catalog item model. ``category`` stores the category name."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, default="")
    price = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class LogEntry(Base):
    """Daily log book entry model.

    ``item_id`` is intentionally not a foreign key: entries outlive deleted
    catalog items and then price at zero.
    """

    __tablename__ = "log_entries"

    id = Column(Integer, primary_key=True, autoincrement=False)
    date = Column(Date, nullable=False)
    item_id = Column(Integer, nullable=False)
    out_quantity = Column(Integer, nullable=False, default=0)
    in_quantity = Column(Integer, nullable=False, default=0)
    pending_quantity = Column(Integer, nullable=False, default=0)
    returned_quantity = Column(Integer, nullable=False, default=0)
    returned_image_url = Column(String, nullable=True)
    returned_date = Column(DateTime, nullable=True)


class InvoiceOverride(Base):
    """Manual invoice edits keyed by pickup date."""

    __tablename__ = "invoice_overrides"

    pickup_date = Column(Date, primary_key=True)
    invoice_no = Column(String, nullable=True)
    return_date = Column(Date, nullable=True)
    updated_at = Column(DateTime, default=_utcnow, nullable=False)


class LaundryService(Base):
    """Guest laundry service price list model."""

    __tablename__ = "laundry_services"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    base_price = Column(Numeric(12, 2), nullable=False)
    express_price = Column(Numeric(12, 2), nullable=False)
    urgent_price = Column(Numeric(12, 2), nullable=False)
    estimated_hours = Column(Integer, nullable=False, default=24)


class GuestLaundryOrder(Base):
    """Guest laundry order model."""

    __tablename__ = "guest_orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String, unique=True, nullable=False)
    guest_name = Column(String, nullable=False)
    room_number = Column(String, nullable=False)
    phone_number = Column(String, nullable=False, default="")
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String, nullable=False, default="received")
    priority = Column(String, nullable=False, default="normal")
    pickup_date = Column(Date, nullable=False)
    delivery_date = Column(Date, nullable=False)
    actual_delivery_date = Column(DateTime, nullable=True)
    notes = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, nullable=False)
    created_by = Column(String, nullable=True)

    # Relationships
    items = relationship(
        "OrderLine",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLine.id",
    )


class OrderLine(Base):
    """Line item on a guest laundry order."""

    __tablename__ = "guest_order_lines"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("guest_orders.id"), nullable=False)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    service = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)

    # Relationships
    order = relationship("GuestLaundryOrder", back_populates="items")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty database
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
