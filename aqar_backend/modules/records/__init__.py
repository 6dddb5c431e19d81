"""Property records module: entity graph, batch sync and bulk load."""

from .registry import COLLECTIONS, EntityKind, resolve_collection
from .routers import router

__all__ = [
    "COLLECTIONS",
    "EntityKind",
    "resolve_collection",
    "router",
]
