"""Member entity for signup, login and profile lookup."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Member:
    """A registered member.

    Members are uniquely identified by email. The ID is assigned by storage
    when the member signs up and never changes.

    Attributes:
        id: Identifier assigned by storage.
        name: Display name.
        email: Email address (unique).
        phone_number: Mobile phone number.
        password_hash: Argon2 hash (never store plaintext).
        created_at: Timestamp when the member signed up.
        updated_at: Timestamp when the member was last updated.
    """

    id: int
    name: str
    email: str
    phone_number: str
    password_hash: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate member data after initialization."""
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
