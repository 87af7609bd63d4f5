"""Tests for role-based access to back-office areas."""

import pytest

from laundryops.domain.access import (
    CATEGORIES,
    GUEST_LAUNDRY,
    GUEST_LAUNDRY_DELETE,
    INVOICES,
    ITEMS,
    LOG_BOOK,
    Role,
    can_access,
    parse_role,
    require_access,
)
from laundryops.domain.errors import AccessDeniedError


@pytest.mark.parametrize("area", [CATEGORIES, ITEMS, LOG_BOOK, INVOICES])
def test_management_areas(area):
    assert can_access(Role.ADMIN, area)
    assert can_access("manager", area)
    assert not can_access(Role.STAFF, area)
    assert not can_access(Role.GUEST, area)


def test_guest_laundry_open_to_staff():
    assert can_access("staff", GUEST_LAUNDRY)
    assert not can_access("guest", GUEST_LAUNDRY)


def test_guest_laundry_delete_needs_management():
    assert can_access("admin", GUEST_LAUNDRY_DELETE)
    assert can_access("manager", GUEST_LAUNDRY_DELETE)
    assert not can_access("staff", GUEST_LAUNDRY_DELETE)


def test_unknown_role_has_no_access():
    assert not can_access("janitor", GUEST_LAUNDRY)


def test_unknown_area():
    with pytest.raises(ValueError):
        can_access(Role.ADMIN, "payroll")


def test_parse_role():
    assert parse_role(" Manager ") == Role.MANAGER
    assert parse_role(Role.STAFF) is Role.STAFF
    with pytest.raises(AccessDeniedError):
        parse_role("janitor")


def test_require_access():
    require_access("admin", INVOICES)

    with pytest.raises(AccessDeniedError, match="does not have access to invoices"):
        require_access("staff", INVOICES)
