"""Seed data for the demo entity graph.

Seeding is idempotent: core users are always re-synced, everything else is
only created when missing. The caller owns the transaction.
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.logging import get_logger
from ...core.utils import add_years, iso_day
from ..auth.password_service import hash_password
from ..records.crud import (
    owner_crud,
    property_crud,
    tenant_crud,
    user_crud,
    wallet_crud,
)
from ..records.models import (
    LeaseContract,
    Owner,
    PaymentSchedule,
    Property,
    Tenant,
    Unit,
    UserRole,
)

logger = get_logger(__name__)

DEMO_PASSWORD = "password"
SYSTEM_PASSWORD = "sys"

OWNER_USER_ID = "user-owner-1"
TENANT_USER_ID = "user-tenant-1"
OWNER_ID = "owner-1"
TENANT_ID = "tenant-1"
OWNER_NATIONAL_ID = "1000000001"
TENANT_NATIONAL_ID = "2000000001"

CORE_USERS = [
    {
        "id": "user-system",
        "name": "System",
        "email": "system@app.com",
        "role": UserRole.SYSTEM,
        "status": "active",
    },
    {
        "id": "user-admin",
        "name": "المدير العام",
        "email": "admin@example.com",
        "role": UserRole.ADMIN,
        "status": "active",
    },
    {
        "id": OWNER_USER_ID,
        "name": "صالح المحمد",
        "email": "saleh.m@example.com",
        "role": UserRole.LANDLORD,
        "status": "active",
    },
    {
        "id": TENANT_USER_ID,
        "name": "محمد علي",
        "email": "mohamed.ali@example.com",
        "role": UserRole.TENANT,
        "status": "active",
    },
]

WALLET_SEED_DATA = [
    {"id": "wallet-system", "user_id": "user-system", "owner_type": "system", "balance": 1000000},
    {"id": "wallet-user-admin", "user_id": "user-admin", "owner_type": "user", "balance": 5000},
    {"id": "wallet-user-owner-1", "user_id": OWNER_USER_ID, "owner_type": "user", "balance": 1000},
    {"id": "wallet-user-tenant-1", "user_id": TENANT_USER_ID, "owner_type": "user", "balance": 25000},
]

OWNER_SEED_DATA = {
    "name": "صالح المحمد",
    "national_id": OWNER_NATIONAL_ID,
    "phone": "0500000001",
    "email": "saleh.m@example.com",
    "management_fee_type": "percentage",
    "management_fee_value": "5",
    "management_agreement_status": "active",
}

TENANT_SEED_DATA = {
    "tenant_name": "محمد علي",
    "tenant_id_no": TENANT_NATIONAL_ID,
    "tenant_phone": "0500000002",
    "nationality": "سعودي",
    "email": "mohamed.ali@example.com",
}


async def seed_core_users(db: AsyncSession) -> int:
    """Create the core users, or reset their passwords if they exist.

    Returns:
        Number of users that existed before seeding
    """
    existing_count = await user_crud.count(db)

    password_hash = hash_password(DEMO_PASSWORD)
    system_password_hash = hash_password(SYSTEM_PASSWORD)

    for user_data in CORE_USERS:
        password = (
            system_password_hash
            if user_data["role"] is UserRole.SYSTEM
            else password_hash
        )
        user = await user_crud.get(db, user_data["id"])
        if user is None:
            values = {key: value for key, value in user_data.items() if key != "id"}
            await user_crud.upsert(db, user_data["id"], {**values, "password": password})
        else:
            await user_crud.upsert(db, user.id, {"password": password}, existing=user)

    return existing_count


async def seed_wallets(db: AsyncSession) -> None:
    for wallet_data in WALLET_SEED_DATA:
        if await wallet_crud.get(db, wallet_data["id"]) is None:
            values = {key: value for key, value in wallet_data.items() if key != "id"}
            await wallet_crud.upsert(db, wallet_data["id"], values)


async def seed_profiles(db: AsyncSession) -> None:
    """Owner and tenant profiles for the demo landlord and tenant users."""
    if await user_crud.get(db, OWNER_USER_ID) is not None:
        if await owner_crud.get_by(db, user_id=OWNER_USER_ID) is None:
            logger.info("Seeding missing owner profile")
            db.add(Owner(id=OWNER_ID, user_id=OWNER_USER_ID, **OWNER_SEED_DATA))

    if await user_crud.get(db, TENANT_USER_ID) is not None:
        if await tenant_crud.get_by(db, user_id=TENANT_USER_ID) is None:
            logger.info("Seeding missing tenant profile")
            db.add(Tenant(id=TENANT_ID, user_id=TENANT_USER_ID, **TENANT_SEED_DATA))

    await db.flush()


async def seed_property_graph(db: AsyncSession, today: date | None = None) -> None:
    """Property, unit and an active contract with one installment."""
    owner = await owner_crud.get(db, OWNER_ID)
    if owner is None or await property_crud.count(db, owner_id=OWNER_ID) > 0:
        return

    logger.info("Seeding property, unit and contract")
    today = today or date.today()

    prop = Property(
        id="prop-1",
        property_name="برج النخيل",
        property_type="عمارة سكنية",
        property_address="حي العليا، الرياض",
        owner_id=owner.id,
        owner_name=owner.name,
        owner_phone=owner.phone,
    )
    unit = Unit(
        id="unit-101",
        property_id=prop.id,
        unit_number="101",
        unit_type="شقة سكنية",
        status="مؤجرة",
        rent_amount="50000",
        area="120",
        rooms="3",
        bathrooms="2",
        floor="1",
    )
    db.add_all([prop, unit])
    await db.flush()

    tenant = await tenant_crud.get(db, TENANT_ID)
    if tenant is None:
        return

    contract = LeaseContract(
        id="contract-1",
        property_id=prop.id,
        property_address=prop.property_address,
        unit_id=unit.id,
        tenant_id=tenant.id,
        tenant_name=tenant.tenant_name,
        tenant_national_id=tenant.tenant_id_no,
        tenant_phone=tenant.tenant_phone,
        landlord_name=owner.name,
        landlord_id=owner.national_id,
        landlord_phone=owner.phone,
        represented_by="landlord",
        start_date=iso_day(today),
        end_date=iso_day(add_years(today, 1)),
        rent_amount=unit.rent_amount,
        rent_cycle="annually",
        security_deposit="2000",
        lease_purpose="سكني",
        terms="شروط العقد القياسية.",
        contract_status="active",
        approval_status="approved",
    )
    db.add(contract)
    await db.flush()

    db.add(
        PaymentSchedule(
            contract_id=contract.id,
            due_date=iso_day(today),
            amount=unit.rent_amount,
        )
    )
    await db.flush()


async def seed_if_needed(db: AsyncSession) -> None:
    """Bring the store up to the canonical demo graph."""
    existing_users = await seed_core_users(db)
    logger.info(f"Core users synced ({existing_users} users existed)")

    if existing_users == 0:
        logger.info("Seeding initial wallets")
        await seed_wallets(db)

    await seed_profiles(db)
    await seed_property_graph(db)
    logger.info("Database seed check complete")
