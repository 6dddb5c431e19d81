"""Authentication module."""

from .routers import router
from .services import authenticate

__all__ = [
    "router",
    "authenticate",
]
