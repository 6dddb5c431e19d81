"""Authentication schemas."""

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginMethod(str, enum.Enum):
    """Supported login modes."""

    EMAIL = "email"
    NATIONAL_ID = "nationalId"


class LoginRequest(BaseModel):
    """Login form.

    ``login_method`` stays a plain optional string so missing or unknown
    modes reach the resolver and get its error message. National IDs sent
    as JSON numbers are read as text.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    login_method: str | None = Field(default=None, description="email or nationalId")
    identifier: str = Field(default="", description="Email or national ID")
    password: str | None = Field(default=None, description="Ignored for nationalId")


class LoginResponse(BaseModel):
    """Successful login: the user record without its credential."""

    success: bool = True
    user: dict[str, Any]
