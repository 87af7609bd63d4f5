"""Database layer for laundryops application."""

from laundryops.database.base import Database
from laundryops.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
