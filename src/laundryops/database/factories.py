"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from laundryops.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENVVAR = "LAUNDRYOPS_DB_PATH"
MEMORY = ":memory:"


def default_database_path() -> Path:
    """Return ~/.laundryops/laundryops.db, creating the directory."""
    db_dir = Path.home() / ".laundryops"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "laundryops.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file, or ":memory:" for a
            process-local store. If None, checks LAUNDRYOPS_DB_PATH
            environment variable, then defaults to ~/.laundryops/laundryops.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get(DB_PATH_ENVVAR)

    if database_path is None:
        database_path = str(default_database_path())

    if database_path == MEMORY:
        return SQLAlchemyDatabase("sqlite://")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
