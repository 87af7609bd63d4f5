"""Invoice aggregation, filtering and manual overrides.

Invoices are never stored. One invoice exists per distinct pickup date in
the log book, priced from the item price table. Manual edits to the
invoice number or return date are stored separately, keyed by pickup
date, and merged back on every recomputation.
"""

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union

from laundryops.database.base import Database
from laundryops.domain.entities import InvoiceEntry, InvoiceOverride, LogEntry
from laundryops.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    invoice_not_found,
)
from laundryops.domain.item import ItemService
from laundryops.utils.date_parser import parse_iso_date

_log = logging.getLogger(__name__)

ALL = "all"

MonthFilter = Union[str, int]
YearFilter = Union[str, int]

# Sentinel so update_invoice can tell "leave alone" from "clear"
_UNSET = object()


def format_invoice_no(pickup_date: date, sequence: int) -> str:
    """Build ``INV-YYYYMMDD-NNN`` from a pickup date and 1-based sequence."""
    return f"INV-{pickup_date.isoformat().replace('-', '')}-{sequence:03d}"


def aggregate_invoices(
    log_entries: Iterable[LogEntry], prices: Mapping[int, Decimal]
) -> list[InvoiceEntry]:
    """Group log entries by pickup date into invoices.

    Only entries with ``out_quantity > 0`` take part. Each invoice totals
    ``price(item_id) * out_quantity`` over its entries; an item ID missing
    from ``prices`` counts as zero. Invoices are numbered 1..N in
    ascending date order.

    Args:
        log_entries: Log book entries
        prices: Map of item ID to unit price

    Returns:
        Invoices sorted by pickup date, each with ``return_date=None``
    """
    totals: dict[date, Decimal] = defaultdict(lambda: Decimal("0"))
    entry_ids: dict[date, list[int]] = defaultdict(list)

    for entry in log_entries:
        if entry.out_quantity <= 0:
            continue
        price = prices.get(entry.item_id, Decimal("0"))
        totals[entry.date] += price * entry.out_quantity
        entry_ids[entry.date].append(entry.id)

    return [
        InvoiceEntry(
            invoice_no=format_invoice_no(pickup_date, sequence),
            pickup_date=pickup_date,
            return_date=None,
            total_price=totals[pickup_date],
            log_entry_ids=tuple(entry_ids[pickup_date]),
        )
        for sequence, pickup_date in enumerate(sorted(totals), start=1)
    ]


def apply_overrides(
    invoices: Iterable[InvoiceEntry], overrides: Iterable[InvoiceOverride]
) -> list[InvoiceEntry]:
    """Merge stored manual edits into freshly aggregated invoices."""
    by_date = {override.pickup_date: override for override in overrides}
    merged = []
    for invoice in invoices:
        override = by_date.get(invoice.pickup_date)
        if override is not None:
            invoice = replace(
                invoice,
                invoice_no=override.invoice_no or invoice.invoice_no,
                return_date=override.return_date,
            )
        merged.append(invoice)
    return merged


def _normalize_filter(value: "MonthFilter | YearFilter", label: str, low: int, high: int):
    if value is None:
        return ALL
    if isinstance(value, str):
        if value.strip().lower() == ALL:
            return ALL
        try:
            value = int(value)
        except ValueError:
            raise ValidationError(f"Invalid {label} '{value}'")
    if not low <= value <= high:
        raise ValidationError(f"Invalid {label} {value}: expected {low}-{high} or 'all'")
    return value


def _pickup_date(invoice: InvoiceEntry) -> Optional[date]:
    try:
        return parse_iso_date(invoice.pickup_date)
    except ValueError:
        return None


def filter_invoices(
    invoices: Iterable[InvoiceEntry],
    month: MonthFilter = ALL,
    year: YearFilter = ALL,
) -> list[InvoiceEntry]:
    """Keep invoices whose pickup date falls in ``month`` and ``year``.

    ``"all"`` matches everything on that axis. Invoices with an unreadable
    pickup date are left out rather than raising.

    Raises:
        ValidationError: If month or year is not "all" or a valid number
    """
    month = _normalize_filter(month, "month", 1, 12)
    year = _normalize_filter(year, "year", 1, 9999)

    result = []
    for invoice in invoices:
        if month == ALL and year == ALL:
            result.append(invoice)
            continue
        pickup = _pickup_date(invoice)
        if pickup is None:
            continue
        if month != ALL and pickup.month != month:
            continue
        if year != ALL and pickup.year != year:
            continue
        result.append(invoice)
    return result


class InvoiceService:
    """Service computing invoices from the log book and managing overrides."""

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db
        self.item_service = ItemService(db)

    def list_invoices(self, month: MonthFilter = ALL, year: YearFilter = ALL) -> list[InvoiceEntry]:
        """Compute invoices with manual edits applied, then filter them."""
        invoices = aggregate_invoices(self.db.list_log_entries(), self.item_service.price_table())
        merged = apply_overrides(invoices, self.db.list_invoice_overrides())
        return filter_invoices(merged, month=month, year=year)

    def get_invoice(self, invoice_no: str) -> Optional[InvoiceEntry]:
        """Find an invoice by its current (possibly edited) number."""
        for invoice in self.list_invoices():
            if invoice.invoice_no == invoice_no:
                return invoice
        return None

    def update_invoice(
        self,
        invoice_no: str,
        return_date=_UNSET,
        new_invoice_no: Optional[str] = None,
    ) -> InvoiceEntry:
        """Edit an invoice's return date and/or number.

        The edit is stored against the invoice's pickup date, so it survives
        later changes to the log book.

        Args:
            invoice_no: Current invoice number
            return_date: New return date (date, ISO string, or None to clear);
                omitted means unchanged
            new_invoice_no: Replacement invoice number; omitted means unchanged

        Returns:
            The invoice with the edit applied

        Raises:
            NotFoundError: If no invoice has ``invoice_no``
            ValidationError: If the return date is invalid or the new number
                is blank
            ConflictError: If the new number is already used by another invoice
        """
        invoices = self.list_invoices()
        invoice = next((inv for inv in invoices if inv.invoice_no == invoice_no), None)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_no))

        if return_date is _UNSET:
            new_return_date = invoice.return_date
        elif return_date is None or (isinstance(return_date, str) and not return_date.strip()):
            new_return_date = None
        else:
            try:
                new_return_date = parse_iso_date(return_date)
            except ValueError as e:
                raise ValidationError(f"Invalid return date: {e}")

        overrides = {o.pickup_date: o for o in self.db.list_invoice_overrides()}
        existing = overrides.get(invoice.pickup_date)
        # Unedited numbers stay unset so they keep following the date sequence
        stored_no = existing.invoice_no if existing is not None else None

        number = invoice.invoice_no
        if new_invoice_no is not None:
            number = new_invoice_no.strip()
            if not number:
                raise ValidationError("Invoice number cannot be empty")
            taken = {inv.invoice_no for inv in invoices if inv.pickup_date != invoice.pickup_date}
            taken.update(
                o.invoice_no
                for o in overrides.values()
                if o.invoice_no and o.pickup_date != invoice.pickup_date
            )
            if number in taken:
                raise ConflictError(f"Invoice number '{number}' is already in use")
            stored_no = number

        self.db.save_invoice_override(
            invoice.pickup_date, invoice_no=stored_no, return_date=new_return_date
        )
        _log.info(
            "Updated invoice for pickup %s: number=%s return_date=%s",
            invoice.pickup_date,
            number,
            new_return_date,
        )
        return replace(invoice, invoice_no=number, return_date=new_return_date)
