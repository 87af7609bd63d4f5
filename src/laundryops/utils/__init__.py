"""Utility functions for laundryops."""

from laundryops.utils.date_parser import parse_date, parse_iso_date
from laundryops.utils.amount_parser import parse_amount, format_amount, format_rupiah

__all__ = ["parse_date", "parse_iso_date", "parse_amount", "format_amount", "format_rupiah"]
