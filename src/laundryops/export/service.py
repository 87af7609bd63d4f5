"""Export service tying domain queries to the file writers."""

import logging
from pathlib import Path

from laundryops.database.base import Database
from laundryops.domain.category import CategoryService
from laundryops.domain.errors import ValidationError
from laundryops.domain.guest_laundry import GuestLaundryService
from laundryops.domain.invoice import ALL, InvoiceService
from laundryops.export.rows import (
    CATEGORY_HEADERS,
    INVOICE_HEADERS,
    ORDER_HEADERS,
    category_rows,
    invoice_rows,
    order_rows,
)
from laundryops.export.writers import INVOICE_SHEET, write_csv, write_pdf, write_xlsx

_log = logging.getLogger(__name__)

INVOICE_FORMATS = ("csv", "xlsx", "pdf")


class ExportService:
    """Service for exporting categories, invoices and orders to files."""

    def __init__(self, db: Database):
        """Initialize export service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)
        self.invoice_service = InvoiceService(db)
        self.guest_laundry_service = GuestLaundryService(db)

    def export_categories(self, path: "str | Path") -> Path:
        """Export all categories to CSV."""
        rows = category_rows(self.category_service.list_categories())
        return write_csv(path, CATEGORY_HEADERS, rows)

    def export_invoices(
        self,
        path: "str | Path",
        file_format: str = "csv",
        month="all",
        year="all",
    ) -> Path:
        """Export the filtered invoice list as CSV, XLSX or PDF.

        Raises:
            ValidationError: If the format is unknown or no invoice matches
            ExportError: If writing the file fails
        """
        file_format = file_format.lower()
        if file_format not in INVOICE_FORMATS:
            raise ValidationError(
                f"Unknown export format '{file_format}'. Expected one of: "
                + ", ".join(INVOICE_FORMATS)
            )

        invoices = self.invoice_service.list_invoices(month=month, year=year)
        if not invoices:
            raise ValidationError("No invoices to export for the selected month and year")

        if file_format == "xlsx":
            return write_xlsx(path, INVOICE_HEADERS, invoice_rows(invoices, raw_totals=True))
        if file_format == "pdf":
            title = INVOICE_SHEET
            if month != ALL or year != ALL:
                title = f"{INVOICE_SHEET} ({month}/{year})"
            return write_pdf(path, INVOICE_HEADERS, invoice_rows(invoices), title=title)
        return write_csv(path, INVOICE_HEADERS, invoice_rows(invoices))

    def export_orders(
        self, path: "str | Path", term: str = "", status="all", priority="all"
    ) -> Path:
        """Export the filtered guest laundry orders to CSV."""
        orders = self.guest_laundry_service.search_orders(term, status=status, priority=priority)
        return write_csv(path, ORDER_HEADERS, order_rows(orders))
