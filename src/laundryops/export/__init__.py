"""File exports for laundryops."""

from laundryops.export.service import ExportService

__all__ = ["ExportService"]
