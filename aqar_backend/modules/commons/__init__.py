"""Common schemas shared across modules."""

from .schemas import ErrorResponse, SuccessResponse

__all__ = [
    "ErrorResponse",
    "SuccessResponse",
]
