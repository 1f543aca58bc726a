"""create_members_table

Revision ID: 3a1f6c2e9b04
Revises:
Create Date: 2026-10-19 10:12:41.508233

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3a1f6c2e9b04"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="Member ID"),
        sa.Column("name", sa.String(length=100), nullable=False, comment="Display name"),
        sa.Column("email", sa.String(length=255), nullable=False, comment="Member email address"),
        sa.Column("phone_number", sa.String(length=100), nullable=False, comment="Mobile phone number"),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Hashed password (argon2)",
        ),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_members_email", "members", ["email"], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_members_email", table_name="members")
    op.drop_table("members")
