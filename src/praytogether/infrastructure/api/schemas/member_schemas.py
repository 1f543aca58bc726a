"""Pydantic schemas for member endpoints."""

from pydantic import Field

from praytogether.domain.entities import Member
from praytogether.infrastructure.api.schemas.auth_schemas import CamelModel


class MemberProfileResponse(CamelModel):
    """Public view of a member. Never includes the password hash."""

    id: int = Field(..., description="Member ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Member's email address")
    phone_number: str = Field(..., description="Mobile phone number")

    @classmethod
    def from_member(cls, member: Member) -> "MemberProfileResponse":
        return cls(
            id=member.id,
            name=member.name,
            email=member.email,
            phone_number=member.phone_number,
        )
