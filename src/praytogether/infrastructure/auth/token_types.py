"""Token types and claim models for member authentication."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TokenType(str, Enum):
    """Discriminator carried in every issued token."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    """Decoded payload of a validated token.

    Attributes:
        member_id: String form of the member ID (also the JWT subject).
        email: Member email address.
        token_type: Access or refresh.
        issued_at: When the token was issued (UTC).
        expires_at: When the token stops being valid (UTC).
        issuer: Name of the issuing service.
    """

    member_id: str
    email: str
    token_type: TokenType
    issued_at: datetime
    expires_at: datetime
    issuer: str


@dataclass
class AuthenticatedMember:
    """The caller identity attached to a request after authentication."""

    member_id: int
    email: str
