"""Convert stored records to camelCase wire dictionaries."""

from typing import Any

from sqlalchemy import inspect

from ...core.utils import camel_keys

# Never sent to clients
SECRET_COLUMNS = frozenset({"password"})


def to_wire(
    obj: Any,
    include: list[str] | None = None,
    exclude: frozenset[str] = SECRET_COLUMNS,
) -> dict[str, Any]:
    """Serialize a model's columns and the given loaded relationships.

    Args:
        obj: Mapped instance
        include: Relationship names to nest (must already be loaded)
        exclude: Column names to leave out
    """
    mapper = inspect(obj).mapper
    data = {
        attr.key: getattr(obj, attr.key)
        for attr in mapper.column_attrs
        if attr.key not in exclude
    }

    for name in include or []:
        related = getattr(obj, name)
        if related is None:
            data[name] = None
        elif isinstance(related, list):
            data[name] = [to_wire(child) for child in related]
        else:
            data[name] = to_wire(related)

    return camel_keys(data)
