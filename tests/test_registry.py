"""Collection registry and transform table stay in lockstep with the models."""

import pytest
from sqlalchemy import inspect

from aqar_backend.core.exceptions import ClientInputError
from aqar_backend.modules.records.registry import (
    COLLECTIONS,
    INVALID_KEY_MESSAGE,
    EntityKind,
    collection_names,
    deletable_collection_names,
    resolve_collection,
    resolve_deletable,
)
from aqar_backend.modules.records.transforms import TRANSFORMS

PUBLIC_NAMES = {
    "properties",
    "units",
    "tenants",
    "owners",
    "contracts",
    "transactions",
    "expenses",
    "wallets",
    "users",
    "reminders",
    "payoutVouchers",
    "settings",
}


def test_public_names():
    assert set(collection_names()) == PUBLIC_NAMES
    assert set(deletable_collection_names()) == PUBLIC_NAMES - {"settings"}


def test_every_kind_has_a_transform():
    assert set(TRANSFORMS) == set(EntityKind)
    assert {spec.kind for spec in COLLECTIONS.values()} == set(EntityKind)


@pytest.mark.parametrize("name", sorted(PUBLIC_NAMES))
def test_declared_relations_cover_model_relationships(name):
    spec = COLLECTIONS[name]
    relationships = {rel.key for rel in inspect(spec.model).relationships}
    assert relationships <= spec.relations


def test_renames_target_real_columns():
    for spec in COLLECTIONS.values():
        columns = {attr.key for attr in inspect(spec.model).column_attrs}
        assert set(spec.renames.values()) <= columns


def test_unknown_key_is_rejected():
    with pytest.raises(ClientInputError) as exc_info:
        resolve_collection("landlords")
    assert exc_info.value.message == INVALID_KEY_MESSAGE


def test_settings_cannot_be_deleted():
    assert resolve_collection("settings").is_singleton
    with pytest.raises(ClientInputError):
        resolve_deletable("settings")
