"""Tests for reducing inbound payloads to persistable columns."""

import pytest

from aqar_backend.core.exceptions import ValidationError
from aqar_backend.modules.records.registry import COLLECTIONS
from aqar_backend.modules.records.sanitizer import sanitize


def test_tenant_civil_id_is_renamed_and_relations_stripped():
    record = sanitize(
        COLLECTIONS["tenants"],
        {
            "id": "tenant-9",
            "tenantName": "سالم",
            "tenantId": "2999999999",
            "documents": [{"id": "doc-1", "name": "id.pdf"}],
            "user": None,
        },
    )

    assert record.id == "tenant-9"
    assert record.values == {"tenant_name": "سالم", "tenant_id_no": "2999999999"}
    assert record.discarded_keys == {"documents", "user"}


def test_contract_keeps_payment_schedule_for_the_transform():
    schedule = [{"dueDate": "2025-01-01", "amount": 100}]
    record = sanitize(
        COLLECTIONS["contracts"],
        {
            "id": "c-1",
            "propertyId": "prop-1",
            "tenantId": "tenant-1",
            "paymentSchedule": schedule,
            "category": "residential",
        },
    )

    assert record.values == {"property_id": "prop-1", "tenant_id": "tenant-1"}
    assert record.relations["payment_schedule"] == schedule


def test_store_managed_timestamps_are_dropped():
    record = sanitize(
        COLLECTIONS["wallets"],
        {"id": "w-1", "balance": 10, "createdAt": "2024-01-01T00:00:00"},
    )
    assert record.values == {"balance": 10}


def test_unknown_field_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        sanitize(COLLECTIONS["units"], {"id": "u-1", "colour": "blue"})
    assert "colour" in exc_info.value.message


def test_undeclared_nested_object_is_rejected():
    with pytest.raises(ValidationError):
        sanitize(COLLECTIONS["expenses"], {"id": "e-1", "contract": {"id": "c-1"}})


def test_item_must_be_an_object():
    with pytest.raises(ValidationError):
        sanitize(COLLECTIONS["properties"], ["prop-1"])


def test_blank_id_is_treated_as_missing():
    assert sanitize(COLLECTIONS["reminders"], {"id": "", "title": "x"}).id is None
