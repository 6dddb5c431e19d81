"""Entity registry: public collection names and how each one is persisted.

Every collection the bulk API accepts is declared here exactly once. The
batch synchronizer, the delete endpoint and the bulk loader all resolve
names through this module.
"""

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ...core.exceptions import ClientInputError
from .models import (
    AppSettings,
    Expense,
    LeaseContract,
    Owner,
    PayoutVoucher,
    Property,
    Reminder,
    Tenant,
    Transaction,
    Unit,
    User,
    Wallet,
)

SETTINGS_COLLECTION = "settings"
INVALID_KEY_MESSAGE = "Invalid key"

# Relation keys stripped from entities without a dedicated rule
GENERIC_RELATIONS = frozenset({"user", "property", "unit", "documents"})


class EntityKind(str, enum.Enum):
    """One variant per persisted entity type reachable from the API."""

    PROPERTY = "property"
    UNIT = "unit"
    TENANT = "tenant"
    OWNER = "owner"
    LEASE_CONTRACT = "leaseContract"
    TRANSACTION = "transaction"
    EXPENSE = "expense"
    WALLET = "wallet"
    USER = "user"
    REMINDER = "reminder"
    PAYOUT_VOUCHER = "payoutVoucher"
    SETTINGS = "appSettings"


@dataclass(frozen=True)
class CollectionSpec:
    """How one public collection maps onto its entity.

    ``relations`` and ``renames`` use snake_case payload keys.
    """

    name: str
    kind: EntityKind
    model: type
    relations: frozenset[str] = frozenset()
    renames: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_singleton(self) -> bool:
        return self.kind is EntityKind.SETTINGS


_SPECS = (
    CollectionSpec(
        "properties",
        EntityKind.PROPERTY,
        Property,
        relations=frozenset({"units", "documents", "owner"}),
    ),
    CollectionSpec(
        "units",
        EntityKind.UNIT,
        Unit,
        relations=frozenset({"appliances", "property"}),
    ),
    CollectionSpec(
        "tenants",
        EntityKind.TENANT,
        Tenant,
        relations=frozenset({"documents", "contracts", "user"}),
        # The UI names the civil ID field after the profile
        renames={"tenant_id": "tenant_id_no"},
    ),
    CollectionSpec(
        "owners",
        EntityKind.OWNER,
        Owner,
        relations=frozenset({"properties", "reminders", "payout_vouchers", "user"}),
    ),
    CollectionSpec(
        "contracts",
        EntityKind.LEASE_CONTRACT,
        LeaseContract,
        # ``category`` is a UI grouping label, not stored
        relations=frozenset(
            {"payment_schedule", "documents", "transactions", "tenant", "category"}
        ),
    ),
    CollectionSpec(
        "transactions",
        EntityKind.TRANSACTION,
        Transaction,
        relations=GENERIC_RELATIONS | {"contract"},
    ),
    CollectionSpec(
        "expenses",
        EntityKind.EXPENSE,
        Expense,
        relations=frozenset({"property", "unit"}),
    ),
    CollectionSpec(
        "wallets",
        EntityKind.WALLET,
        Wallet,
        relations=frozenset({"user"}),
    ),
    CollectionSpec(
        "users",
        EntityKind.USER,
        User,
        relations=frozenset({"wallet", "owner", "tenant"}),
    ),
    CollectionSpec(
        "reminders",
        EntityKind.REMINDER,
        Reminder,
        relations=GENERIC_RELATIONS | {"owner"},
    ),
    CollectionSpec(
        "payoutVouchers",
        EntityKind.PAYOUT_VOUCHER,
        PayoutVoucher,
        relations=GENERIC_RELATIONS | {"owner"},
    ),
    CollectionSpec(SETTINGS_COLLECTION, EntityKind.SETTINGS, AppSettings),
)

COLLECTIONS: Mapping[str, CollectionSpec] = MappingProxyType(
    {spec.name: spec for spec in _SPECS}
)


def collection_names() -> list[str]:
    """All public names accepted by the save endpoint."""
    return list(COLLECTIONS)


def deletable_collection_names() -> list[str]:
    """All public names accepted by the delete endpoint."""
    return [name for name, spec in COLLECTIONS.items() if not spec.is_singleton]


def resolve_collection(name: str) -> CollectionSpec:
    """Resolve a public collection name for saving.

    Raises:
        ClientInputError: If the name is not registered
    """
    spec = COLLECTIONS.get(name)
    if spec is None:
        raise ClientInputError(INVALID_KEY_MESSAGE)
    return spec


def resolve_deletable(name: str) -> CollectionSpec:
    """Resolve a public collection name for delete-by-id.

    The settings singleton is never deleted.

    Raises:
        ClientInputError: If the name is not registered or not deletable
    """
    spec = resolve_collection(name)
    if spec.is_singleton:
        raise ClientInputError(INVALID_KEY_MESSAGE)
    return spec
