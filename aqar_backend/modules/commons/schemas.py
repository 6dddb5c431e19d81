"""Common schemas shared across all modules."""

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Acknowledgement for writes."""

    success: bool = Field(default=True, description="Whether the request succeeded")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    success: bool = Field(default=False)
    error: str = Field(..., description="Human-readable error message")
