"""Role-based visibility for back-office areas."""

from enum import Enum

from laundryops.domain.errors import AccessDeniedError


class Role(str, Enum):
    """Back-office user roles."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    GUEST = "guest"


CATEGORIES = "categories"
ITEMS = "items"
LOG_BOOK = "log_book"
INVOICES = "invoices"
GUEST_LAUNDRY = "guest_laundry"
GUEST_LAUNDRY_DELETE = "guest_laundry.delete"

_MANAGEMENT = frozenset({Role.ADMIN, Role.MANAGER})

AREA_ROLES: dict[str, frozenset[Role]] = {
    CATEGORIES: _MANAGEMENT,
    ITEMS: _MANAGEMENT,
    LOG_BOOK: _MANAGEMENT,
    INVOICES: _MANAGEMENT,
    GUEST_LAUNDRY: frozenset({Role.ADMIN, Role.MANAGER, Role.STAFF}),
    GUEST_LAUNDRY_DELETE: _MANAGEMENT,
}


def parse_role(value: str | Role) -> Role:
    """Parse a role name.

    Raises:
        AccessDeniedError: If the role is not known
    """
    if isinstance(value, Role):
        return value
    try:
        return Role(value.strip().lower())
    except ValueError:
        raise AccessDeniedError(f"Unknown role '{value}'")


def can_access(role: str | Role, area: str) -> bool:
    """Return True if ``role`` may use ``area``."""
    if area not in AREA_ROLES:
        raise ValueError(f"Unknown area '{area}'")
    try:
        return parse_role(role) in AREA_ROLES[area]
    except AccessDeniedError:
        return False


def require_access(role: str | Role, area: str) -> None:
    """Raise AccessDeniedError unless ``role`` may use ``area``."""
    if not can_access(role, area):
        raise AccessDeniedError(
            f"Role '{role.value if isinstance(role, Role) else role}' "
            f"does not have access to {area.replace('_', ' ')}"
        )
