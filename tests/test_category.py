"""Tests for category service and commands."""

from decimal import Decimal

import pytest
from laundryops.cli.main import cli
from laundryops.domain.entities import CategoryStatus
from laundryops.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)


def test_create_category(category_service):
    category_id = category_service.create_category(
        code="LIN", name="Linen", description="Room linen"
    )

    category = category_service.get_category(category_id)
    assert category.code == "LIN"
    assert category.name == "Linen"
    assert category.description == "Room linen"
    assert category.status == CategoryStatus.ACTIVE
    assert category.created_at is not None
    assert category.updated_at is not None


def test_create_category_duplicate_code(category_service):
    category_service.create_category(code="LIN", name="Linen")

    with pytest.raises(ConflictError):
        category_service.create_category(code="lin", name="Other Linen")


@pytest.mark.parametrize("code,name", [("", "Linen"), ("LIN", "  "), (None, "Linen")])
def test_create_category_requires_code_and_name(category_service, code, name):
    with pytest.raises(ValidationError):
        category_service.create_category(code=code, name=name)
    assert category_service.list_categories() == []


def test_create_category_invalid_status(category_service):
    with pytest.raises(ValidationError):
        category_service.create_category(code="LIN", name="Linen", status="archived")


def test_list_categories_ordered_by_code(category_service):
    category_service.create_category(code="FRM", name="Formal")
    category_service.create_category(code="CLO", name="Clothing")
    category_service.create_category(code="LIN", name="Linen")

    codes = [cat.code for cat in category_service.list_categories()]
    assert codes == ["CLO", "FRM", "LIN"]


def test_search_categories(category_service):
    category_service.create_category(code="LIN", name="Linen")
    category_service.create_category(code="CLO", name="Clothing")

    assert [c.code for c in category_service.search_categories("lin")] == ["LIN"]
    assert [c.code for c in category_service.search_categories("CLO")] == ["CLO"]
    assert len(category_service.search_categories("")) == 2
    assert category_service.search_categories("xyz") == []


def test_update_category_keeps_created_at(category_service):
    category_id = category_service.create_category(code="LIN", name="Linen")
    before = category_service.get_category(category_id)

    updated = category_service.update_category(
        category_id, name="Linen & Towels", status="inactive"
    )

    assert updated.name == "Linen & Towels"
    assert updated.code == "LIN"
    assert updated.status == CategoryStatus.INACTIVE
    assert updated.created_at == before.created_at
    assert updated.updated_at >= before.updated_at


def test_update_category_code_conflict(category_service):
    category_service.create_category(code="LIN", name="Linen")
    other = category_service.create_category(code="CLO", name="Clothing")

    with pytest.raises(ConflictError):
        category_service.update_category(other, code="LIN")


def test_update_category_same_code_allowed(category_service):
    category_id = category_service.create_category(code="LIN", name="Linen")

    updated = category_service.update_category(category_id, code="LIN", description="x")
    assert updated.description == "x"


def test_update_missing_category(category_service):
    with pytest.raises(NotFoundError):
        category_service.update_category(99, name="Nope")


def test_delete_category_blocked_by_items(category_service, sample_items):
    linen = category_service.list_categories()[0]

    with pytest.raises(DependencyError, match="used by 2 items"):
        category_service.delete_category(linen.id)
    assert category_service.get_category(linen.id) is not None


def test_delete_category_after_items_removed(category_service, item_service, sample_items):
    linen = category_service.list_categories()[0]
    for item_id in sample_items.values():
        item_service.delete_item(item_id)

    category_service.delete_category(linen.id)

    assert category_service.get_category(linen.id) is None


def test_delete_unused_category(category_service, item_service):
    category_id = category_service.create_category(code="CLO", name="Clothing")
    item_service.create_item(name="Napkin", category="Linen", price=Decimal("1500"))

    assert category_service.count_items_referencing("Clothing") == 0
    category_service.delete_category(category_id)
    assert category_service.list_categories() == []


def test_cli_category_create_and_list(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "category",
            "create",
            "LIN",
            "Linen",
            "--description",
            "Room linen",
        ],
    )
    assert result.exit_code == 0
    assert "Created category 'Linen' [LIN]" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "category", "list"])
    assert result.exit_code == 0
    assert "LIN" in result.output
    assert "Room linen" in result.output


def test_cli_category_duplicate(cli_runner, temp_db, category_service):
    category_service.create_category(code="LIN", name="Linen")

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "category", "create", "LIN", "Again"]
    )

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_cli_category_update(cli_runner, temp_db, category_service):
    category_id = category_service.create_category(code="LIN", name="Linen")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "category",
            "update",
            str(category_id),
            "--status",
            "inactive",
        ],
    )

    assert result.exit_code == 0
    temp_db.disconnect()
    assert category_service.get_category(category_id).status == CategoryStatus.INACTIVE


def test_cli_category_delete_blocked(cli_runner, temp_db, category_service, sample_items):
    linen = category_service.list_categories()[0]

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "category", "delete", str(linen.id), "--yes"],
    )

    assert result.exit_code == 1
    assert "Cannot delete category 'Linen'" in result.output


def test_cli_category_list_empty(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "category", "list"])

    assert result.exit_code == 0
    assert "No categories found" in result.output


def test_cli_category_denied_for_staff(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--role", "staff", "category", "list"]
    )

    assert result.exit_code == 1
    assert "does not have access to categories" in result.output


def test_cli_category_list_shows_item_counts(cli_runner, temp_db, category_service, sample_items):
    category_service.create_category(code="CLO", name="Clothing")

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "category", "list"])

    assert result.exit_code == 0
    assert "Items" in result.output
    rows = [line.split() for line in result.output.splitlines() if line[:1].isdigit()]
    lines = {row[1]: row for row in rows}
    assert lines["LIN"][4] == "2"
    assert lines["CLO"][4] == "0"


def test_cli_category_export_unusable_directory(cli_runner, temp_db, category_service, tmp_path):
    category_service.create_category(code="LIN", name="Linen")
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "category",
            "export",
            str(blocker / "categories.csv"),
        ],
    )

    assert result.exit_code == 1
    assert "Error: Could not write categories.csv" in result.output
