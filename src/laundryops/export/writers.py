"""Export writers for CSV, XLSX and PDF files.

Every writer renders into a temporary file next to the destination and
renames it into place, so a failed export never leaves a partial file.
"""

import csv
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from laundryops.domain.errors import ExportError

_log = logging.getLogger(__name__)

INVOICE_SHEET = "Invoices"

PAGE_WIDTH, PAGE_HEIGHT = A4  # 210 x 297 mm
MARGIN = 15 * mm
ROW_HEIGHT = 7 * mm
TITLE_GAP = 12 * mm


@contextmanager
def atomic_output(path: "str | Path") -> Iterator[Path]:
    """Yield a temp path that replaces ``path`` only if the block succeeds.

    Raises:
        ExportError: If the target directory is unusable or the block
            fails; the temp file is removed first
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
        )
        os.close(fd)
    except OSError as e:
        _log.error("Cannot create %s: %s", target, e)
        raise ExportError(f"Could not write {target.name}: {e}") from e
    tmp_path = Path(tmp_name)
    try:
        yield tmp_path
        os.replace(tmp_path, target)
    except ExportError:
        tmp_path.unlink(missing_ok=True)
        raise
    except Exception as e:
        tmp_path.unlink(missing_ok=True)
        _log.error("Export to %s failed: %s", target, e)
        raise ExportError(f"Could not write {target.name}: {e}") from e


def write_csv(path: "str | Path", headers: Sequence[str], rows: Sequence[Sequence]) -> Path:
    """Write a header row and data rows as CSV."""
    with atomic_output(path) as tmp:
        with open(tmp, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            writer.writerows(rows)
    _log.info("Wrote %s rows to %s", len(rows), path)
    return Path(path)


def write_xlsx(
    path: "str | Path",
    headers: Sequence[str],
    rows: Sequence[Sequence],
    sheet_name: str = INVOICE_SHEET,
) -> Path:
    """Write a single-sheet workbook with a bold header row."""
    with atomic_output(path) as tmp:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name
        ws.append(list(headers))
        for cell in ws[1]:
            cell.font = Font(bold=True)
        for row in rows:
            ws.append(list(row))
        for index, header in enumerate(headers, start=1):
            width = max([len(str(header))] + [len(str(row[index - 1])) for row in rows])
            ws.column_dimensions[ws.cell(row=1, column=index).column_letter].width = width + 2
        wb.save(tmp)
    _log.info("Wrote %s rows to %s", len(rows), path)
    return Path(path)


def _column_positions(count: int) -> list[float]:
    usable = PAGE_WIDTH - 2 * MARGIN
    return [MARGIN + usable * i / count for i in range(count)]


def _draw_header(pdf: canvas.Canvas, title: str, headers: Sequence[str], page: int) -> float:
    y = PAGE_HEIGHT - MARGIN
    pdf.setFont("Helvetica-Bold", 14)
    pdf.drawString(MARGIN, y, title)
    pdf.setFont("Helvetica", 8)
    pdf.drawRightString(PAGE_WIDTH - MARGIN, y, f"Page {page}")
    y -= TITLE_GAP

    pdf.setFont("Helvetica-Bold", 9)
    for x, header in zip(_column_positions(len(headers)), headers):
        pdf.drawString(x, y, str(header))
    pdf.line(MARGIN, y - 2 * mm, PAGE_WIDTH - MARGIN, y - 2 * mm)
    pdf.setFont("Helvetica", 9)
    return y - ROW_HEIGHT


def write_pdf(
    path: "str | Path",
    headers: Sequence[str],
    rows: Sequence[Sequence],
    title: str = INVOICE_SHEET,
) -> Path:
    """Draw the rows as a table on A4 pages, repeating the header per page."""
    with atomic_output(path) as tmp:
        pdf = canvas.Canvas(str(tmp), pagesize=A4)
        pdf.setTitle(title)
        page = 1
        y = _draw_header(pdf, title, headers, page)
        columns = _column_positions(len(headers))

        for row in rows:
            if y < MARGIN:
                pdf.showPage()
                page += 1
                y = _draw_header(pdf, title, headers, page)
            for x, value in zip(columns, row):
                pdf.drawString(x, y, str(value))
            y -= ROW_HEIGHT

        pdf.save()
    _log.info("Wrote %s rows to %s (%s page(s))", len(rows), path, page)
    return Path(path)
