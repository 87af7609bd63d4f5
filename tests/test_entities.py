"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from laundryops.domain.entities import (
    DEFAULT_ITEM_SERVICE,
    ImportResult,
    LogEntry,
    OrderItemRequest,
    OrderStatus,
    ReturnStatus,
)


def _entry(pending, returned):
    return LogEntry(
        id=1,
        date=date(2024, 1, 1),
        item_id=1,
        out_quantity=pending,
        in_quantity=0,
        pending_quantity=pending,
        returned_quantity=returned,
    )


def test_log_entry_remaining_and_status():
    entry = _entry(5, 2)

    assert entry.remaining_quantity == 3
    assert entry.status == ReturnStatus.PENDING


def test_log_entry_completed_when_all_returned():
    assert _entry(5, 5).status == ReturnStatus.COMPLETED


def test_log_entry_with_nothing_pending_is_completed():
    assert _entry(0, 0).status == ReturnStatus.COMPLETED


def test_log_entry_is_frozen():
    entry = _entry(5, 0)
    with pytest.raises(FrozenInstanceError):
        entry.returned_quantity = 1


def test_order_item_request_defaults():
    request = OrderItemRequest(service_id=3)

    assert request.quantity == 1
    assert request.service == DEFAULT_ITEM_SERVICE == "Wash & Iron"


def test_order_status_values():
    assert OrderStatus("in-progress") == OrderStatus.IN_PROGRESS
    assert [s.value for s in OrderStatus] == [
        "received",
        "in-progress",
        "completed",
        "delivered",
        "cancelled",
    ]


def test_import_result_defaults():
    result = ImportResult()

    assert (result.imported, result.failed, result.errors) == (0, 0, ())
