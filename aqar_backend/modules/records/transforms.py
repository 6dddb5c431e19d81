"""Entity transform pipeline.

Turns a sanitized record into the values written by the upsert, plus any
child-collection replacements that must run after it. Dispatch is a closed
table keyed by ``EntityKind``.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ...config import settings
from ...core.exceptions import ValidationError
from ..auth.password_service import hash_password, is_hashed
from .models import PaymentSchedule
from .registry import EntityKind
from .sanitizer import SanitizedRecord


@dataclass
class ChildReplacement:
    """Delete every ``model`` row owned by the parent, then insert ``rows``."""

    model: type
    parent_column: str
    parent_id: str
    rows: list[dict[str, Any]]


@dataclass
class TransformResult:
    values: dict[str, Any]
    replacements: list[ChildReplacement] = field(default_factory=list)


Transform = Callable[[SanitizedRecord, bool], TransformResult]


def canonical_amount(value: Any) -> str:
    """Text form of a money amount; whole floats drop their ``.0``."""
    if value is None or isinstance(value, bool):
        raise ValidationError("amount is required", field="amount", value=value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return str(value).strip()


def pass_through(record: SanitizedRecord, exists: bool) -> TransformResult:
    return TransformResult(values=dict(record.values))


def transform_user(record: SanitizedRecord, exists: bool) -> TransformResult:
    """Hash plaintext credentials; never overwrite a stored one with nothing."""
    values = dict(record.values)
    password = values.pop("password", None)

    if password and not isinstance(password, str):
        raise ValidationError("password must be text", field="password")
    if password:
        values["password"] = password if is_hashed(password) else hash_password(password)
    elif not exists:
        values["password"] = hash_password(settings.default_user_password)

    return TransformResult(values=values)


def transform_lease_contract(record: SanitizedRecord, exists: bool) -> TransformResult:
    """Route the embedded payment schedule into a wholesale replacement."""
    result = TransformResult(values=dict(record.values))

    schedule = record.relations.get("payment_schedule")
    if not isinstance(schedule, list):
        return result

    rows = []
    for entry in schedule:
        if not isinstance(entry, dict):
            raise ValidationError("payment schedule entries must be objects")
        rows.append(
            {
                "due_date": entry.get("dueDate"),
                "amount": canonical_amount(entry.get("amount")),
                "status": entry.get("status"),
            }
        )

    result.replacements.append(
        ChildReplacement(
            model=PaymentSchedule,
            parent_column="contract_id",
            parent_id=record.id,
            rows=rows,
        )
    )
    return result


TRANSFORMS: dict[EntityKind, Transform] = {
    EntityKind.PROPERTY: pass_through,
    EntityKind.UNIT: pass_through,
    EntityKind.TENANT: pass_through,
    EntityKind.OWNER: pass_through,
    EntityKind.LEASE_CONTRACT: transform_lease_contract,
    EntityKind.TRANSACTION: pass_through,
    EntityKind.EXPENSE: pass_through,
    EntityKind.WALLET: pass_through,
    EntityKind.USER: transform_user,
    EntityKind.REMINDER: pass_through,
    EntityKind.PAYOUT_VOUCHER: pass_through,
    EntityKind.SETTINGS: pass_through,
}


def apply_transform(
    kind: EntityKind, record: SanitizedRecord, exists: bool
) -> TransformResult:
    """Run the transform registered for ``kind``.

    Args:
        kind: Entity type the record belongs to
        record: Output of the sanitizer
        exists: Whether a row with this id is already stored
    """
    return TRANSFORMS[kind](record, exists)
