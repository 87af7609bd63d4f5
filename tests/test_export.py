"""Tests for CSV, XLSX and PDF exports."""

import csv
from datetime import date
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from laundryops.domain.entities import OrderItemRequest
from laundryops.domain.errors import ExportError, ValidationError
from laundryops.export import writers
from laundryops.export.rows import INVOICE_HEADERS, invoice_rows
from laundryops.export.writers import write_csv


@pytest.fixture
def sample_invoices(log_book_service, invoice_service, sample_items):
    """Two invoices; the second has a return date."""
    towel = sample_items["Bath Towel"]
    sheet = sample_items["Bed Sheet"]
    log_book_service.add_entry(date(2024, 1, 1), towel, out_quantity=3)
    log_book_service.add_entry(date(2024, 1, 1), sheet, out_quantity=2)
    log_book_service.add_entry(date(2024, 2, 3), sheet, out_quantity=1)
    invoice_service.update_invoice("INV-20240203-002", return_date="2024-02-05")
    return invoice_service.list_invoices()


def _read_csv(path):
    with open(path, encoding="utf-8", newline="") as f:
        return list(csv.reader(f))


def test_invoice_rows_use_dash_for_missing_return_date(sample_invoices):
    rows = invoice_rows(sample_invoices)

    assert rows[0] == ("INV-20240101-001", "2024-01-01", "-", "95000")
    assert rows[1] == ("INV-20240203-002", "2024-02-03", "2024-02-05", "25000")


def test_export_invoices_csv(export_service, sample_invoices, tmp_path):
    path = export_service.export_invoices(tmp_path / "invoices.csv")

    rows = _read_csv(path)
    assert rows[0] == list(INVOICE_HEADERS)
    assert rows[1] == ["INV-20240101-001", "2024-01-01", "-", "95000"]
    assert rows[2] == ["INV-20240203-002", "2024-02-03", "2024-02-05", "25000"]


def test_export_invoices_csv_filtered(export_service, sample_invoices, tmp_path):
    path = export_service.export_invoices(tmp_path / "feb.csv", month=2, year=2024)

    rows = _read_csv(path)
    assert len(rows) == 2
    assert rows[1][0] == "INV-20240203-002"


def test_export_invoices_xlsx(export_service, sample_invoices, tmp_path):
    path = export_service.export_invoices(tmp_path / "invoices.xlsx", file_format="xlsx")

    wb = load_workbook(path)
    assert wb.sheetnames == ["Invoices"]
    ws = wb["Invoices"]
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0] == INVOICE_HEADERS
    assert rows[1][:3] == ("INV-20240101-001", "2024-01-01", "-")
    assert rows[1][3] == 95000
    assert rows[2][2] == "2024-02-05"
    assert ws["A1"].font.bold


def test_export_invoices_pdf(export_service, sample_invoices, tmp_path):
    path = export_service.export_invoices(tmp_path / "invoices.pdf", file_format="pdf")

    assert path.read_bytes().startswith(b"%PDF")


def test_export_invoices_pdf_repeats_header_per_page(
    export_service, log_book_service, sample_items, tmp_path, monkeypatch
):
    towel = sample_items["Bath Towel"]
    for month in (1, 2, 3):
        for day in range(1, 29):
            log_book_service.add_entry(date(2024, month, day), towel, out_quantity=1)

    pages = []
    original = writers._draw_header

    def counting_header(pdf, title, headers, page):
        pages.append(page)
        return original(pdf, title, headers, page)

    monkeypatch.setattr(writers, "_draw_header", counting_header)

    path = export_service.export_invoices(tmp_path / "many.pdf", file_format="pdf")

    assert path.read_bytes().startswith(b"%PDF")
    assert len(pages) > 1
    assert pages == list(range(1, len(pages) + 1))


def test_export_invoices_empty(export_service, tmp_path):
    target = tmp_path / "none.csv"

    with pytest.raises(ValidationError, match="No invoices to export"):
        export_service.export_invoices(target)
    assert not target.exists()


def test_export_invoices_unknown_format(export_service, sample_invoices, tmp_path):
    with pytest.raises(ValidationError):
        export_service.export_invoices(tmp_path / "invoices.doc", file_format="doc")


def test_export_categories_csv(export_service, category_service, tmp_path):
    category_service.create_category(code="LIN", name="Linen", description="Room linen")

    rows = _read_csv(export_service.export_categories(tmp_path / "categories.csv"))

    assert rows[0] == ["id", "code", "name", "description", "status", "createdAt", "updatedAt"]
    assert rows[1][1:5] == ["LIN", "Linen", "Room linen", "active"]
    assert rows[1][5]


def test_export_orders_csv(export_service, guest_laundry_service, sample_services, tmp_path):
    guest_laundry_service.create_order(
        guest_name="Jane Doe",
        room_number="101",
        phone_number="",
        priority="normal",
        pickup_date="2024-03-01",
        delivery_date="2024-03-02",
        items=[OrderItemRequest(service_id=sample_services["Dress"].id, quantity=1)],
    )

    rows = _read_csv(export_service.export_orders(tmp_path / "orders.csv"))

    assert len(rows) == 2
    assert rows[1][1] == "Jane Doe"
    assert rows[1][2] == "101"


def test_failed_write_leaves_no_file(tmp_path):
    target = tmp_path / "broken.csv"

    class Unprintable:
        def __str__(self):
            raise RuntimeError("cannot render")

    with pytest.raises(ExportError):
        write_csv(target, ["a"], [[Unprintable()]])

    assert list(tmp_path.iterdir()) == []


def test_unusable_target_directory_raises_export_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(ExportError, match="out.csv"):
        write_csv(blocker / "out.csv", ["a"], [[1]])

    assert [p.name for p in tmp_path.iterdir()] == ["blocker"]


def test_export_service_reports_unusable_directory(export_service, sample_invoices, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ExportError):
        export_service.export_invoices(blocker / "invoices.xlsx", file_format="xlsx")


def test_successful_write_replaces_existing_file(tmp_path):
    target = tmp_path / "out.csv"
    target.write_text("old", encoding="utf-8")

    write_csv(target, ["a", "b"], [[1, Decimal("2")]])

    assert _read_csv(target) == [["a", "b"], ["1", "2"]]
    assert [p.name for p in tmp_path.iterdir()] == ["out.csv"]
