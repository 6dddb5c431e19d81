"""CRUD operations for the property records module."""

from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.base_crud import BaseCRUD
from .models import (
    SETTINGS_ID,
    AppSettings,
    Expense,
    LeaseContract,
    Owner,
    PaymentSchedule,
    PayoutVoucher,
    Property,
    Reminder,
    Tenant,
    Transaction,
    Unit,
    User,
    Wallet,
)

# Relationships included by the bulk load
property_crud = BaseCRUD(Property, default_relationships=["units", "documents"])
unit_crud = BaseCRUD(Unit, default_relationships=["appliances"])
tenant_crud = BaseCRUD(Tenant, default_relationships=["documents"])
owner_crud = BaseCRUD(Owner, default_relationships=["properties"])
contract_crud = BaseCRUD(
    LeaseContract, default_relationships=["payment_schedule", "documents"]
)
transaction_crud = BaseCRUD(Transaction)
expense_crud = BaseCRUD(Expense)
wallet_crud = BaseCRUD(Wallet)
user_crud = BaseCRUD(User)
reminder_crud = BaseCRUD(Reminder)
payout_voucher_crud = BaseCRUD(PayoutVoucher)
payment_schedule_crud = BaseCRUD(PaymentSchedule, default_order_by="due_date")

_CRUD_BY_MODEL: dict[type, BaseCRUD] = {
    crud.model: crud
    for crud in (
        property_crud,
        unit_crud,
        tenant_crud,
        owner_crud,
        contract_crud,
        transaction_crud,
        expense_crud,
        wallet_crud,
        user_crud,
        reminder_crud,
        payout_voucher_crud,
        payment_schedule_crud,
    )
}


def crud_for(model: type) -> BaseCRUD:
    """CRUD helper for a registered entity model."""
    return _CRUD_BY_MODEL[model]


# ----- Child collections -----


async def replace_children(
    db: AsyncSession,
    model: type,
    parent_column: str,
    parent_id: str,
    rows: list[dict[str, Any]],
) -> None:
    """Delete all children of ``parent_id`` and insert ``rows`` in order."""
    await db.execute(delete(model).where(getattr(model, parent_column) == parent_id))
    db.add_all([model(**{parent_column: parent_id}, **row) for row in rows])
    await db.flush()


# ----- Settings -----


async def get_settings(db: AsyncSession) -> AppSettings | None:
    """Get the settings singleton."""
    return await db.get(AppSettings, SETTINGS_ID)


async def upsert_settings(db: AsyncSession, values: dict[str, Any]) -> AppSettings:
    """Create the settings singleton or overwrite the supplied fields."""
    app_settings = await get_settings(db)
    if app_settings is None:
        app_settings = AppSettings(id=SETTINGS_ID, **values)
        db.add(app_settings)
    else:
        for field, value in values.items():
            setattr(app_settings, field, value)
    await db.flush()
    return app_settings
