"""SQLAlchemy model for the members table."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from praytogether.infrastructure.persistence.database import Base


class MemberModel(Base):
    """SQLAlchemy model for the members table.

    Members are uniquely identified by email. The unique index on ``email``
    is what serializes concurrent signups for the same address.

    Attributes:
        id: Primary key assigned by the database.
        name: Display name.
        email: Member email address (unique).
        phone_number: Mobile phone number as entered.
        password_hash: Argon2 hash of the password.
        created_at: Timestamp when the member signed up.
        updated_at: Timestamp when the member was last updated.
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Member ID",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Display name",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Member email address",
    )
    phone_number: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Mobile phone number",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<MemberModel(id={self.id})>"
