"""CSV import domain service."""

import csv
import logging
from pathlib import Path
from typing import Optional

from laundryops.database.base import Database
from laundryops.domain.category import CategoryService
from laundryops.domain.entities import ImportResult
from laundryops.domain.errors import ValidationError

_log = logging.getLogger(__name__)

# Accepted header spellings per field; the first match wins
COLUMN_ALIASES = {
    "code": ("Code", "code"),
    "name": ("Name", "name"),
    "description": ("Description", "description"),
}


def _cell(row: dict, field: str) -> Optional[str]:
    for header in COLUMN_ALIASES[field]:
        value = row.get(header)
        if value:
            return value.strip()
    return None


class CategoryImportService:
    """Service for importing categories from CSV files."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)

    def import_csv(self, csv_file_path: str) -> ImportResult:
        """Import categories from a CSV file.

        Rows are created one at a time in file order. A row that fails is
        counted and described in the result; the remaining rows are still
        imported.

        Args:
            csv_file_path: Path to CSV file with Code, Name and optional
                Description columns (lower-case headers are accepted too)

        Returns:
            ImportResult with imported and failed counts and per-row errors

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValidationError: If the file has no header row
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        result = ImportResult()

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                raise ValidationError("CSV file has no columns")

            # Process each row
            for row_num, row in enumerate(reader, start=2):  # Start at 2 (header is row 1)
                if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                    continue
                result = self._import_row(result, row_num, row)

        _log.info(
            "Imported %s categories from %s (%s failed)",
            result.imported,
            csv_path.name,
            result.failed,
        )
        return result

    def _import_row(self, result: ImportResult, row_num: int, row: dict) -> ImportResult:
        """Fold one row into the running result."""
        code = _cell(row, "code")
        name = _cell(row, "name")
        try:
            self.category_service.create_category(
                code=code,
                name=name,
                description=_cell(row, "description") or "",
            )
        except ValueError as e:
            label = name or code or "?"
            _log.warning("Row %s (%s) failed: %s", row_num, label, e)
            return ImportResult(
                imported=result.imported,
                failed=result.failed + 1,
                errors=result.errors + (f"Row {row_num} ({label}): {e}",),
            )
        return ImportResult(
            imported=result.imported + 1,
            failed=result.failed,
            errors=result.errors,
        )
