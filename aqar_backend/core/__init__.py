"""Core infrastructure for the Aqar backend."""

from .base_crud import BaseCRUD
from .exceptions import (
    AqarException,
    AuthenticationError,
    ClientInputError,
    NotFoundError,
    StoreTransactionError,
    ValidationError,
)

__all__ = [
    "BaseCRUD",
    "AqarException",
    "AuthenticationError",
    "ClientInputError",
    "NotFoundError",
    "StoreTransactionError",
    "ValidationError",
]
