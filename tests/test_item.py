"""Tests for catalog item service and commands."""

from decimal import Decimal

import pytest
from laundryops.cli.main import cli
from laundryops.domain.entities import UNKNOWN_ITEM_NAME
from laundryops.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_and_get_item(item_service):
    item_id = item_service.create_item(name="Napkin", category="Linen", price=Decimal("1500"))

    item = item_service.get_item(item_id)
    assert item.name == "Napkin"
    assert item.category == "Linen"
    assert item.price == Decimal("1500")


def test_create_item_rejects_negative_price(item_service):
    with pytest.raises(ValidationError):
        item_service.create_item(name="Napkin", category="Linen", price=Decimal("-1"))


def test_create_item_requires_name(item_service):
    with pytest.raises(ValidationError):
        item_service.create_item(name=" ", category="Linen", price=Decimal("1"))


@pytest.mark.parametrize("price", ["NaN", "sNaN", "Infinity", "-Infinity"])
def test_create_item_rejects_non_finite_price(item_service, price):
    with pytest.raises(ValidationError):
        item_service.create_item(name="Napkin", category="Linen", price=Decimal(price))
    assert item_service.list_items() == []


def test_update_item_rejects_non_finite_price(item_service, sample_items):
    with pytest.raises(ValidationError):
        item_service.update_item(sample_items["Bath Towel"], price=Decimal("NaN"))
    assert item_service.get_item(sample_items["Bath Towel"]).price == Decimal("15000")


def test_create_item_with_taken_id(item_service):
    item_service.create_item(name="Bath Mat", category="Linen", price=Decimal("5000"), item_id=3)

    with pytest.raises(ConflictError, match="Item ID 3"):
        item_service.create_item(
            name="Pillow Case", category="Linen", price=Decimal("4000"), item_id=3
        )
    assert item_service.get_item(3).name == "Bath Mat"
    assert len(item_service.list_items()) == 1


def test_update_item(item_service, sample_items):
    towel = sample_items["Bath Towel"]

    item_service.update_item(towel, price=Decimal("17500"))

    item = item_service.get_item(towel)
    assert item.price == Decimal("17500")
    assert item.name == "Bath Towel"


def test_update_missing_item(item_service):
    with pytest.raises(NotFoundError):
        item_service.update_item(99, name="Ghost")


def test_get_item_name_falls_back(item_service, sample_items):
    assert item_service.get_item_name(sample_items["Bed Sheet"]) == "Bed Sheet"
    assert item_service.get_item_name(999) == UNKNOWN_ITEM_NAME


def test_price_table(item_service, sample_items):
    table = item_service.price_table()

    assert table == {
        sample_items["Bath Towel"]: Decimal("15000"),
        sample_items["Bed Sheet"]: Decimal("25000"),
    }


def test_delete_item_leaves_log_entries(item_service, log_book_service, sample_items):
    towel = sample_items["Bath Towel"]
    entry = log_book_service.add_entry("2024-01-01", towel, out_quantity=1)

    item_service.delete_item(towel)

    assert item_service.get_item(towel) is None
    assert log_book_service.get_entry(entry.id) is not None
    assert item_service.get_item_name(towel) == UNKNOWN_ITEM_NAME


def test_cli_item_create_and_list(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "item",
            "create",
            "Table Cloth",
            "--category",
            "Linen",
            "--price",
            "Rp 7,500",
        ],
    )
    assert result.exit_code == 0
    assert "Created item 'Table Cloth'" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "item", "list"])
    assert result.exit_code == 0
    assert "Table Cloth" in result.output
    assert "Rp 7,500" in result.output


def test_cli_item_invalid_price(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "item",
            "create",
            "Table Cloth",
            "--category",
            "Linen",
            "--price",
            "cheap",
        ],
    )

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_cli_item_create_duplicate_id(cli_runner, temp_db):
    base = ["--db-path", temp_db.database_path, "item", "create"]

    first = cli_runner.invoke(
        cli, base + ["Bath Mat", "--category", "Linen", "--price", "5000", "--id", "3"]
    )
    second = cli_runner.invoke(
        cli, base + ["Pillow Case", "--category", "Linen", "--price", "4000", "--id", "3"]
    )

    assert first.exit_code == 0
    assert second.exit_code == 1
    assert "Error: Item ID 3 is already in use" in second.output


def test_cli_item_nan_price(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "item",
            "create",
            "Table Cloth",
            "--category",
            "Linen",
            "--price",
            "nan",
        ],
    )

    assert result.exit_code == 1
    assert "Error: Price must be a number" in result.output


def test_cli_item_delete_missing(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "item", "delete", "42", "--yes"]
    )

    assert result.exit_code == 1
    assert "not found" in result.output
