"""
User schemas for signup, signin and public author summaries.

Input models accept both snake_case and camelCase keys; responses are
serialized with camelCase aliases.
"""

from typing import Annotated
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    SecretStr,
    StringConstraints,
    field_validator,
)

from blog_api.configs import MIN_PASSWORD_LENGTH

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class UserCreate(BaseModel):
    """Signup payload."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    first_name: NameStr = Field(
        ...,
        alias="firstName",
        description="User first name",
        examples=["Ada"],
    )
    last_name: NameStr = Field(
        ...,
        alias="lastName",
        description="User last name",
        examples=["Lovelace"],
    )
    email: EmailStr = Field(
        ...,
        description="Email address",
        examples=["ada@example.com"],
    )
    password: SecretStr = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        description=f"Password (at least {MIN_PASSWORD_LENGTH} characters)",
        examples=["password123"],
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are unique case-insensitively."""
        return v.strip().lower()


class UserSignin(BaseModel):
    """Signin payload."""

    model_config = ConfigDict(frozen=True)

    email: Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1)] = (
        Field(..., description="Email address", examples=["ada@example.com"])
    )
    password: SecretStr = Field(..., min_length=1, description="Password")


class UserSummary(BaseModel):
    """Public identity summary. Never carries credential material."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
