"""API Schemas for request/response validation."""

from praytogether.infrastructure.api.schemas.auth_schemas import (
    CamelModel,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
)
from praytogether.infrastructure.api.schemas.error_schemas import ErrorResponseSchema
from praytogether.infrastructure.api.schemas.member_schemas import MemberProfileResponse

__all__ = [
    "CamelModel",
    "ErrorResponseSchema",
    "LoginRequest",
    "LoginResponse",
    "MemberProfileResponse",
    "SignupRequest",
    "SignupResponse",
]
