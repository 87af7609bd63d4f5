"""Domain layer for laundryops application."""

_SERVICES = {
    "CategoryService": "laundryops.domain.category",
    "CategoryImportService": "laundryops.domain.csv_import",
    "ItemService": "laundryops.domain.item",
    "LogBookService": "laundryops.domain.log_book",
    "InvoiceService": "laundryops.domain.invoice",
    "GuestLaundryService": "laundryops.domain.guest_laundry",
}

__all__ = list(_SERVICES)


# Import services lazily; they depend on laundryops.database, which imports
# laundryops.domain.entities.
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
