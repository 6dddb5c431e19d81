"""
Custom exception classes for consistent error handling across all modules.

Every exception carries the HTTP status code the API reports for it.
"""

from typing import Any


class AqarException(Exception):
    """Base exception for all Aqar related errors."""

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ClientInputError(AqarException):
    """Raised when a request names an unknown collection or login mode."""

    status_code = 400


class ValidationError(AqarException):
    """Raised when an item payload cannot be mapped onto its entity."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        if field:
            full_message = f"Validation error for field '{field}': {message}"
        else:
            full_message = message
        super().__init__(full_message, details)
        self.field = field
        self.value = value


class AuthenticationError(AqarException):
    """Raised when authentication fails."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class NotFoundError(AqarException):
    """Raised when a resource is not found.

    Deletes report this as a generic store failure.
    """

    status_code = 500

    def __init__(
        self,
        resource_type: str,
        identifier: Any,
        details: dict[str, Any] | None = None,
    ):
        message = f"{resource_type} with identifier '{identifier}' not found"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class StoreTransactionError(AqarException):
    """Raised when a store transaction fails and is rolled back."""

    status_code = 500
