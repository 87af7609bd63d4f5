"""Log book domain service.

The log book records, per date and linen item, how many pieces went out,
came in and are still pending. Pending pieces are closed out through
:meth:`LogBookService.record_return`, which is the only way the returned
counter grows.
"""

import logging
from datetime import date, datetime, UTC
from typing import Optional

from laundryops.database.base import Database
from laundryops.domain.entities import LogEntry as LogEntryEntity, ReturnStatus
from laundryops.domain.errors import (
    NotFoundError,
    ValidationError,
    log_entry_not_found,
    return_image_required,
    return_quantity_out_of_range,
)
from laundryops.utils.date_parser import parse_iso_date

_log = logging.getLogger(__name__)


def _check_quantity(value: int, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be a whole number")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")
    return value


def _check_entry_date(value: "str | date") -> date:
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(str(e))


class LogBookService:
    """Service for the daily operations log book."""

    def __init__(self, db: Database):
        """Initialize log book service.

        Args:
            db: Database instance
        """
        self.db = db

    def next_entry_id(self) -> int:
        """Next ID: highest existing ID + 1, or 1 for an empty log."""
        current = self.db.get_max_log_entry_id()
        return 1 if current is None else current + 1

    def add_entry(
        self,
        entry_date: "str | date",
        item_id: int,
        out_quantity: int = 0,
        in_quantity: int = 0,
        pending_quantity: int = 0,
    ) -> LogEntryEntity:
        """Add a log entry.

        The three quantities are independent inputs; no relation between
        them is enforced.

        Args:
            entry_date: Pick-up date (ISO ``YYYY-MM-DD`` or date)
            item_id: Catalog item ID
            out_quantity: Pieces sent out
            in_quantity: Pieces received back
            pending_quantity: Pieces still outstanding

        Returns:
            The created log entry, with returned quantity 0

        Raises:
            ValidationError: If the date is invalid or a quantity is negative
        """
        entry_date = _check_entry_date(entry_date)
        out_quantity = _check_quantity(out_quantity, "Out quantity")
        in_quantity = _check_quantity(in_quantity, "In quantity")
        pending_quantity = _check_quantity(pending_quantity, "Pending quantity")

        entry_id = self.db.create_log_entry(
            entry_id=self.next_entry_id(),
            date=entry_date,
            item_id=item_id,
            out_quantity=out_quantity,
            in_quantity=in_quantity,
            pending_quantity=pending_quantity,
        )
        _log.info("Added log entry id=%s date=%s item=%s", entry_id, entry_date, item_id)
        return self.db.get_log_entry(entry_id)

    def get_entry(self, entry_id: int) -> Optional[LogEntryEntity]:
        """Get log entry by ID."""
        return self.db.get_log_entry(entry_id)

    def _require_entry(self, entry_id: int) -> LogEntryEntity:
        entry = self.db.get_log_entry(entry_id)
        if entry is None:
            raise NotFoundError(log_entry_not_found(entry_id))
        return entry

    def list_entries(self, status: Optional[ReturnStatus] = None) -> list[LogEntryEntity]:
        """List log entries, optionally only those in a given return status."""
        entries = self.db.list_log_entries()
        if status is None:
            return entries
        return [entry for entry in entries if entry.status == ReturnStatus(status)]

    def update_entry(
        self,
        entry_id: int,
        entry_date: "str | date",
        item_id: int,
        out_quantity: int,
        in_quantity: int,
        pending_quantity: int,
    ) -> LogEntryEntity:
        """Edit a log entry's date, item and quantities.

        Return tracking fields are left untouched. Raising the pending
        quantity above the returned quantity reopens a completed entry.

        Raises:
            NotFoundError: If the entry does not exist
            ValidationError: On invalid input, or if the pending quantity
                would drop below what has already been returned
        """
        entry = self._require_entry(entry_id)
        entry_date = _check_entry_date(entry_date)
        out_quantity = _check_quantity(out_quantity, "Out quantity")
        in_quantity = _check_quantity(in_quantity, "In quantity")
        pending_quantity = _check_quantity(pending_quantity, "Pending quantity")

        if pending_quantity < entry.returned_quantity:
            raise ValidationError(
                f"Pending quantity cannot be lower than the {entry.returned_quantity} "
                "already returned"
            )

        self.db.update_log_entry(
            entry_id,
            date=entry_date,
            item_id=item_id,
            out_quantity=out_quantity,
            in_quantity=in_quantity,
            pending_quantity=pending_quantity,
        )
        _log.info("Updated log entry id=%s", entry_id)
        return self.db.get_log_entry(entry_id)

    def delete_entry(self, entry_id: int) -> None:
        """Delete a log entry."""
        self._require_entry(entry_id)
        self.db.delete_log_entry(entry_id)
        _log.info("Deleted log entry id=%s", entry_id)

    def record_return(
        self,
        entry_id: int,
        quantity: int,
        image_url: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LogEntryEntity:
        """Record returned pieces against an entry's pending quantity.

        Args:
            entry_id: Log entry ID
            quantity: Pieces returned now; 1..remaining
            image_url: Reference to a proof-of-return image. Required when
                this return closes out the pending quantity.
            now: Timestamp to record; defaults to the current UTC time

        Returns:
            The updated log entry

        Raises:
            NotFoundError: If the entry does not exist
            ValidationError: If the quantity is out of range, or the return
                would complete the entry without an image
        """
        entry = self._require_entry(entry_id)
        remaining = entry.remaining_quantity

        if (
            isinstance(quantity, bool)
            or not isinstance(quantity, int)
            or quantity < 1
            or quantity > remaining
        ):
            _log.warning(
                "Rejected return of %r for log entry id=%s (remaining %s)",
                quantity,
                entry_id,
                remaining,
            )
            raise ValidationError(return_quantity_out_of_range(remaining))

        image_url = (image_url or "").strip() or None
        new_returned = entry.returned_quantity + quantity
        if new_returned >= entry.pending_quantity and image_url is None:
            _log.warning("Rejected closing return for log entry id=%s without image", entry_id)
            raise ValidationError(return_image_required())

        returned_date = now if now is not None else datetime.now(UTC)
        self.db.update_log_entry_return(
            entry_id,
            returned_quantity=new_returned,
            returned_image_url=image_url if image_url is not None else entry.returned_image_url,
            returned_date=returned_date,
        )
        _log.info(
            "Recorded return of %s for log entry id=%s (%s/%s)",
            quantity,
            entry_id,
            new_returned,
            entry.pending_quantity,
        )
        return self.db.get_log_entry(entry_id)

    @staticmethod
    def status_of(entry: LogEntryEntity) -> ReturnStatus:
        """Return tracking status of an entry."""
        return entry.status
