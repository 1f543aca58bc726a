"""Pydantic schemas for authentication endpoints."""

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

EMAIL_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 15

# Korean mobile numbers: 010-1234-5678 or 01012345678
PHONE_PATTERN = re.compile(r"^01[0-9]-?[0-9]{4}-?[0-9]{4}$")


class CamelModel(BaseModel):
    """Base schema using camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def check_email_length(value: object) -> object:
    """Reject emails longer than EMAIL_MAX_LENGTH before format validation."""
    if isinstance(value, str) and len(value) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError(
            "string_too_long",
            "String should have at most {max_length} characters",
            {"max_length": EMAIL_MAX_LENGTH},
        )
    return value


def check_email_format(value: str) -> str:
    """Validate the email format and return the address unchanged."""
    validate_email(value)
    return value


EmailAddress = Annotated[str, AfterValidator(check_email_format)]


class SignupRequest(CamelModel):
    """Request body for member signup."""

    name: str = Field(..., min_length=1, max_length=20, description="Display name")
    email: EmailAddress = Field(
        ...,
        description="Member's email address (at most 50 characters)",
        json_schema_extra={"format": "email"},
    )
    phone_number: str = Field(..., description="Mobile phone number, e.g. 010-1234-5678")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        description="Password (8 to 15 characters)",
    )

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_length(cls, v: object) -> object:
        return check_email_length(v)

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: str) -> str:
        if not PHONE_PATTERN.match(v):
            raise PydanticCustomError("phone", "Invalid mobile phone number format")
        return v


class LoginRequest(CamelModel):
    """Request body for login."""

    email: EmailAddress = Field(
        ...,
        description="Member's email address",
        json_schema_extra={"format": "email"},
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        description="Member's password",
    )


class LoginResponse(CamelModel):
    """Response for a successful login."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")


class SignupResponse(CamelModel):
    """Empty body returned on successful signup."""

    pass
