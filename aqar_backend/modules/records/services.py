"""Property records business logic: bulk load, batch save and delete."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import (
    ClientInputError,
    NotFoundError,
    StoreTransactionError,
    ValidationError,
)
from ...core.logging import get_logger
from . import crud
from .registry import (
    CollectionSpec,
    resolve_collection,
    resolve_deletable,
)
from .sanitizer import sanitize
from .serializers import to_wire
from .transforms import apply_transform

logger = get_logger(__name__)

DELETE_FAILED_MESSAGE = "Failed to delete item"

DEFAULT_SETTINGS = {
    "appName": "نظام عقاري",
    "logoUrl": "",
    "primaryColor": "indigo",
    "contractTemplate": "default",
    "statementTemplate": "default",
    "isDemoMode": False,
}


# ----- Load -----


async def load_all(db: AsyncSession) -> dict[str, Any]:
    """Read every collection the client works with, relations included.

    User records never carry their credential.
    """
    settings_row = await crud.get_settings(db)

    return {
        "properties": await _load(db, crud.property_crud),
        "units": await _load(db, crud.unit_crud),
        "tenants": await _load(db, crud.tenant_crud),
        "owners": await _load(db, crud.owner_crud),
        "contracts": await _load(db, crud.contract_crud),
        "transactions": await _load(db, crud.transaction_crud),
        "expenses": await _load(db, crud.expense_crud),
        "wallets": await _load(db, crud.wallet_crud),
        "users": await _load(db, crud.user_crud),
        "reminders": await _load(db, crud.reminder_crud),
        "payoutVouchers": await _load(db, crud.payout_voucher_crud),
        "settings": to_wire(settings_row) if settings_row else dict(DEFAULT_SETTINGS),
    }


async def _load(db: AsyncSession, model_crud) -> list[dict[str, Any]]:
    records = await model_crud.get_multi(db)
    return [
        to_wire(record, include=model_crud.default_relationships) for record in records
    ]


# ----- Save -----


async def save_collection(db: AsyncSession, key: str, payload: Any) -> int:
    """Upsert a whole collection payload in one transaction.

    Args:
        db: Database session with no transaction in progress
        key: Public collection name
        payload: A list of items, or one object for ``settings``

    Returns:
        Number of records written

    Raises:
        ClientInputError: Unknown key or wrong payload shape; nothing written
        StoreTransactionError: Any item failed; nothing written
    """
    spec = resolve_collection(key)

    if spec.is_singleton:
        if not isinstance(payload, dict):
            raise ClientInputError(f"{key} payload must be an object")
        items = [payload]
    else:
        if not isinstance(payload, list):
            raise ClientInputError(f"{key} payload must be a list")
        items = payload

    logger.info(f"Saving {len(items)} item(s) to {key}")

    try:
        async with db.begin():
            for position, item in enumerate(items):
                if spec.is_singleton:
                    await _save_settings(db, spec, item)
                else:
                    await _save_item(db, spec, item, position)
    except Exception as exc:
        logger.exception(f"Error saving {key}: {type(exc).__name__}")
        raise StoreTransactionError(f"Failed to save {key}") from exc

    return len(items)


async def _save_settings(db: AsyncSession, spec: CollectionSpec, item: Any) -> None:
    record = sanitize(spec, item)
    result = apply_transform(spec.kind, record, exists=True)
    await crud.upsert_settings(db, result.values)


async def _save_item(
    db: AsyncSession, spec: CollectionSpec, item: Any, position: int
) -> None:
    """Sanitize, transform and upsert one item, then replace its children."""
    record = sanitize(spec, item)
    if record.id is None:
        raise ValidationError(f"{spec.name}[{position}] has no id", field="id")

    model_crud = crud.crud_for(spec.model)
    existing = await model_crud.get(db, record.id)
    result = apply_transform(spec.kind, record, exists=existing is not None)

    await model_crud.upsert(db, record.id, result.values, existing=existing)

    for replacement in result.replacements:
        await crud.replace_children(
            db,
            replacement.model,
            replacement.parent_column,
            replacement.parent_id,
            replacement.rows,
        )


# ----- Delete -----


async def delete_item(db: AsyncSession, key: str, id: str) -> None:
    """Delete one record by id.

    A missing id is reported like any other store failure.

    Raises:
        ClientInputError: Unknown or non-deletable key
        StoreTransactionError: Nothing deleted
    """
    spec = resolve_deletable(key)
    model_crud = crud.crud_for(spec.model)

    try:
        async with db.begin():
            deleted = await model_crud.delete_by_id(db, id)
            if deleted == 0:
                raise NotFoundError(spec.kind.value, id)
    except Exception as exc:
        logger.error(f"Error deleting {id} from {key}: {exc}")
        raise StoreTransactionError(DELETE_FAILED_MESSAGE) from exc

    logger.info(f"Deleted {id} from {key}")
