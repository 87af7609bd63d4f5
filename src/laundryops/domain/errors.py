"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class AccessDeniedError(DomainError):
    """The acting role may not use this part of the back office."""


class ExportError(DomainError):
    """Writing an export file failed; no output file was left behind."""


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def item_not_found(item_id: int) -> str:
    """Return message for missing catalog item."""
    return f"Item {item_id} not found"


def log_entry_not_found(entry_id: int) -> str:
    """Return message for missing log entry."""
    return f"Log entry {entry_id} not found"


def invoice_not_found(invoice_no: str) -> str:
    """Return message for missing invoice number."""
    return f"Invoice '{invoice_no}' not found"


def order_not_found(order_id: int) -> str:
    """Return message for missing guest laundry order."""
    return f"Order {order_id} not found"


def service_not_found(service_id: int) -> str:
    """Return message for missing laundry service."""
    return f"Laundry service {service_id} not found"


def duplicate_category_code(code: str) -> str:
    """Return message for duplicate category code."""
    return f"Category with code '{code}' already exists"


def category_delete_blocked(category_name: str, item_count: int) -> str:
    """Return message when items still reference a category."""
    return (
        f"Cannot delete category '{category_name}': it is used by "
        f"{item_count} item{'s' if item_count != 1 else ''}. "
        "Please move or delete them first."
    )


def return_quantity_out_of_range(remaining: int) -> str:
    """Return message for a return quantity outside 1..remaining."""
    return f"Returned quantity must be between 1 and {remaining}"


def return_image_required() -> str:
    """Return message when closing a return without proof."""
    return "An image is required to mark the item as fully returned"
