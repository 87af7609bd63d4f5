"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from laundryops.database.factories import create_sqlite_database
from laundryops.domain import entities
from laundryops.domain.errors import NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_category_returns_domain_model(self, temp_db):
        """Test that get_category returns a domain Category entity."""
        category_id = temp_db.create_category(code="LIN", name="Linen", description="Linen")

        category = temp_db.get_category(category_id)

        assert isinstance(category, entities.Category)
        assert category.id == category_id
        assert category.status == entities.CategoryStatus.ACTIVE
        assert isinstance(category.created_at, datetime)
        assert category.created_at.tzinfo is not None

    def test_get_category_by_code_ignores_case(self, temp_db):
        category_id = temp_db.create_category(code="LIN", name="Linen")

        assert temp_db.get_category_by_code("lin").id == category_id
        assert temp_db.get_category_by_code("CLO") is None

    def test_item_with_explicit_id(self, temp_db):
        item_id = temp_db.create_item(
            name="Napkin", category="Linen", price=Decimal("1500"), item_id=15
        )

        item = temp_db.get_item(item_id)
        assert item_id == 15
        assert isinstance(item, entities.Item)
        assert item.price == Decimal("1500")

    def test_update_item_partial(self, temp_db):
        item_id = temp_db.create_item(name="Napkin", category="Linen", price=Decimal("1500"))

        temp_db.update_item(item_id, price=Decimal("2000"))

        item = temp_db.get_item(item_id)
        assert item.name == "Napkin"
        assert item.price == Decimal("2000")

    def test_count_items_in_category(self, temp_db):
        temp_db.create_item(name="Napkin", category="Linen", price=Decimal("1500"))
        temp_db.create_item(name="Table Cloth", category="Linen", price=Decimal("7500"))
        temp_db.create_item(name="Shirt", category="Clothing", price=Decimal("15000"))

        assert temp_db.count_items_in_category("Linen") == 2
        assert temp_db.count_items_in_category("Formal") == 0

    def test_log_entries_ordered_by_date(self, temp_db):
        temp_db.create_log_entry(2, date(2024, 1, 5), 1, 1, 0, 0)
        temp_db.create_log_entry(1, date(2024, 1, 9), 1, 1, 0, 0)
        temp_db.create_log_entry(3, date(2024, 1, 1), 1, 1, 0, 0)

        entries = temp_db.list_log_entries()

        assert [e.id for e in entries] == [3, 2, 1]
        assert all(isinstance(e, entities.LogEntry) for e in entries)
        assert temp_db.get_max_log_entry_id() == 3

    def test_max_log_entry_id_empty(self, temp_db):
        assert temp_db.get_max_log_entry_id() is None

    def test_update_log_entry_return(self, temp_db):
        temp_db.create_log_entry(1, date(2024, 1, 1), 1, 4, 0, 4)
        returned_at = datetime(2024, 1, 2, 10, 0, tzinfo=UTC)

        temp_db.update_log_entry_return(1, 4, "proof.jpg", returned_at)

        entry = temp_db.get_log_entry(1)
        assert entry.returned_quantity == 4
        assert entry.returned_image_url == "proof.jpg"
        assert entry.returned_date == returned_at

    def test_save_invoice_override_upserts(self, temp_db):
        pickup = date(2024, 1, 1)

        temp_db.save_invoice_override(pickup, invoice_no="INV-A", return_date=None)
        temp_db.save_invoice_override(pickup, invoice_no="INV-B", return_date=date(2024, 1, 3))

        overrides = temp_db.list_invoice_overrides()
        assert len(overrides) == 1
        assert isinstance(overrides[0], entities.InvoiceOverride)
        assert overrides[0].invoice_no == "INV-B"
        assert temp_db.get_invoice_override(pickup).return_date == date(2024, 1, 3)

    def test_order_round_trip(self, temp_db):
        order_id = temp_db.create_order(
            order_number="GL-2024-001",
            guest_name="Jane Doe",
            room_number="101",
            phone_number="",
            priority="express",
            pickup_date=date(2024, 3, 1),
            delivery_date=date(2024, 3, 2),
            notes="",
            items=[
                {
                    "name": "Shirt",
                    "category": "Clothing",
                    "service": "Wash & Iron",
                    "quantity": 2,
                    "unit_price": Decimal("22500"),
                    "total_price": Decimal("45000"),
                }
            ],
            total_amount=Decimal("45000"),
            created_by="staff",
        )

        order = temp_db.get_order(order_id)

        assert isinstance(order, entities.GuestLaundryOrder)
        assert order.status == entities.OrderStatus.RECEIVED
        assert order.priority == entities.OrderPriority.EXPRESS
        assert len(order.items) == 1
        assert isinstance(order.items[0], entities.LaundryItem)
        assert order.created_by == "staff"
        assert temp_db.list_order_numbers("GL-2024-") == ["GL-2024-001"]
        assert temp_db.list_order_numbers("GL-2025-") == []

    def test_update_order_details_rejects_unknown_fields(self, temp_db):
        with pytest.raises(ValueError):
            temp_db.update_order_details(1, total_amount=Decimal("1"))

    def test_missing_rows_raise_not_found(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_category(1)
        with pytest.raises(NotFoundError):
            temp_db.delete_item(1)
        with pytest.raises(NotFoundError):
            temp_db.delete_log_entry(1)
        with pytest.raises(NotFoundError):
            temp_db.delete_order(1)


def test_in_memory_database_shares_state():
    """An in-memory store keeps data across sessions of one process."""
    db = create_sqlite_database(":memory:")
    db.connect()
    db.initialize_schema()
    category_id = db.create_category(code="LIN", name="Linen")
    db.disconnect()

    assert db.get_category(category_id).code == "LIN"
    db.disconnect()


def test_database_path_from_environment(tmp_path, monkeypatch):
    db_file = tmp_path / "env.db"
    monkeypatch.setenv("LAUNDRYOPS_DB_PATH", str(db_file))

    db = create_sqlite_database()

    assert db.database_url == f"sqlite:///{db_file}"
