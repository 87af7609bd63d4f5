"""Shared pytest fixtures for laundryops tests."""

import tempfile
import os
from decimal import Decimal
from pathlib import Path
import pytest

from laundryops.database.factories import create_sqlite_database
from laundryops.domain.category import CategoryService
from laundryops.domain.csv_import import CategoryImportService
from laundryops.domain.guest_laundry import GuestLaundryService
from laundryops.domain.invoice import InvoiceService
from laundryops.domain.item import ItemService
from laundryops.domain.log_book import LogBookService
from laundryops.export import ExportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def item_service(temp_db):
    """Create an ItemService with a temporary database."""
    return ItemService(temp_db)


@pytest.fixture
def log_book_service(temp_db):
    """Create a LogBookService with a temporary database."""
    return LogBookService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def guest_laundry_service(temp_db):
    """Create a GuestLaundryService with a temporary database."""
    return GuestLaundryService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a CategoryImportService with a temporary database."""
    return CategoryImportService(temp_db)


@pytest.fixture
def export_service(temp_db):
    """Create an ExportService with a temporary database."""
    return ExportService(temp_db)


@pytest.fixture
def sample_items(category_service, item_service):
    """Create a Linen category and two priced items.

    Returns a dict of item name to item ID.
    """
    category_service.create_category(code="LIN", name="Linen")
    return {
        "Bath Towel": item_service.create_item(
            name="Bath Towel", category="Linen", price=Decimal("15000")
        ),
        "Bed Sheet": item_service.create_item(
            name="Bed Sheet", category="Linen", price=Decimal("25000")
        ),
    }


@pytest.fixture
def sample_services(guest_laundry_service):
    """Seed the default laundry service price list and return it."""
    from laundryops.cli.commands.seed import DEFAULT_SERVICES

    for name, category, base, express, urgent, hours in DEFAULT_SERVICES:
        guest_laundry_service.create_service(name, category, base, express, urgent, hours)
    return {svc.name: svc for svc in guest_laundry_service.list_services()}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
