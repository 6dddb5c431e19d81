"""Tests for the per-entity transform pipeline."""

import pytest

from aqar_backend.core.exceptions import ValidationError
from aqar_backend.modules.auth.password_service import (
    hash_password,
    is_hashed,
    verify_password,
)
from aqar_backend.modules.records.models import PaymentSchedule
from aqar_backend.modules.records.registry import EntityKind
from aqar_backend.modules.records.sanitizer import SanitizedRecord
from aqar_backend.modules.records.transforms import apply_transform, canonical_amount


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1500.0, "1500"), (1500.5, "1500.5"), (200, "200"), (" 75 ", "75")],
)
def test_canonical_amount(value, expected):
    assert canonical_amount(value) == expected


@pytest.mark.parametrize("value", [None, True])
def test_canonical_amount_requires_a_number(value):
    with pytest.raises(ValidationError):
        canonical_amount(value)


def test_plaintext_password_is_hashed():
    record = SanitizedRecord(id="u-1", values={"name": "A", "password": "secret"})

    values = apply_transform(EntityKind.USER, record, exists=False).values

    assert is_hashed(values["password"])
    assert verify_password("secret", values["password"])


def test_existing_hash_is_kept():
    stored = hash_password("secret", rounds=4)
    record = SanitizedRecord(id="u-1", values={"password": stored})

    values = apply_transform(EntityKind.USER, record, exists=True).values

    assert values["password"] == stored


def test_missing_password_leaves_stored_credential_alone():
    record = SanitizedRecord(id="u-1", values={"name": "A", "password": ""})

    values = apply_transform(EntityKind.USER, record, exists=True).values

    assert "password" not in values


def test_new_user_without_password_gets_the_default():
    record = SanitizedRecord(id="u-1", values={"name": "A"})

    values = apply_transform(EntityKind.USER, record, exists=False).values

    assert verify_password("password", values["password"])


def test_contract_schedule_becomes_a_replacement():
    record = SanitizedRecord(
        id="c-1",
        values={"rent_amount": "12000"},
        relations={
            "payment_schedule": [
                {"dueDate": "2025-01-01", "amount": 6000.0, "status": "paid"},
                {"dueDate": "2025-07-01", "amount": "6000"},
            ]
        },
    )

    result = apply_transform(EntityKind.LEASE_CONTRACT, record, exists=False)

    assert result.values == {"rent_amount": "12000"}
    [replacement] = result.replacements
    assert replacement.model is PaymentSchedule
    assert replacement.parent_column == "contract_id"
    assert replacement.parent_id == "c-1"
    assert replacement.rows == [
        {"due_date": "2025-01-01", "amount": "6000", "status": "paid"},
        {"due_date": "2025-07-01", "amount": "6000", "status": None},
    ]


def test_empty_schedule_still_clears_rows():
    record = SanitizedRecord(id="c-1", values={}, relations={"payment_schedule": []})

    [replacement] = apply_transform(
        EntityKind.LEASE_CONTRACT, record, exists=True
    ).replacements

    assert replacement.rows == []


def test_contract_without_schedule_has_no_replacement():
    record = SanitizedRecord(id="c-1", values={}, relations={"documents": []})

    assert apply_transform(EntityKind.LEASE_CONTRACT, record, exists=True).replacements == []


def test_pass_through_copies_values():
    record = SanitizedRecord(id="p-1", values={"property_name": "Tower"})

    result = apply_transform(EntityKind.PROPERTY, record, exists=False)

    assert result.values == {"property_name": "Tower"}
    assert result.values is not record.values


def test_non_text_password_is_rejected():
    record = SanitizedRecord(id="u-1", values={"name": "A", "password": 12345})

    with pytest.raises(ValidationError) as exc_info:
        apply_transform(EntityKind.USER, record, exists=False)
    assert exc_info.value.field == "password"
