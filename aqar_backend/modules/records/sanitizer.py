"""Relation sanitizer: reduce an inbound payload to persistable columns."""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import inspect

from ...core.exceptions import ValidationError
from ...core.utils import snake_keys
from ...database import MANAGED_COLUMNS
from .registry import CollectionSpec


@dataclass
class SanitizedRecord:
    """Scalar column values plus the relation payloads that were removed."""

    id: str | None
    values: dict[str, Any]
    relations: dict[str, Any] = field(default_factory=dict)

    @property
    def discarded_keys(self) -> frozenset[str]:
        return frozenset(self.relations)


def column_names(model: type) -> frozenset[str]:
    """Column attribute names of a mapped model."""
    return frozenset(attr.key for attr in inspect(model).column_attrs)


def sanitize(spec: CollectionSpec, item: Any) -> SanitizedRecord:
    """Strip relation objects from ``item`` and validate what is left.

    Keys arrive in camelCase and leave as model attribute names. Declared
    relations are removed, declared renames applied and store-managed
    timestamps dropped. Anything else must be a scalar column of the model.

    Raises:
        ValidationError: If the item is not an object, nests an undeclared
            relation, or names a field the entity does not have
    """
    if not isinstance(item, dict):
        raise ValidationError(f"{spec.name} item must be an object")

    data = snake_keys(item)
    record_id = data.pop("id", None)

    relations = {key: data.pop(key) for key in spec.relations if key in data}

    for source, target in spec.renames.items():
        if source in data:
            data[target] = data.pop(source)

    columns = column_names(spec.model)
    values = {}
    for key, value in data.items():
        if key in MANAGED_COLUMNS:
            continue
        if isinstance(value, (dict, list)):
            raise ValidationError(
                f"unexpected nested object on {spec.name}", field=key
            )
        if key not in columns:
            raise ValidationError(f"unknown field on {spec.name}", field=key)
        values[key] = value

    return SanitizedRecord(
        id=str(record_id) if record_id not in (None, "") else None,
        values=values,
        relations=relations,
    )
