"""Member repository for database operations."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from praytogether.domain.entities import Member
from praytogether.infrastructure.persistence.models import MemberModel


class MemberRepositoryError(Exception):
    """Raised when a member storage operation fails.

    Attributes:
        operation: The repository operation that failed.
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"member repository {operation}: {message}")


class DuplicateEmailError(MemberRepositoryError):
    """Raised when an insert violates the unique email constraint."""

    pass


def to_entity(model: MemberModel) -> Member:
    """Convert a MemberModel row to a Member entity."""
    return Member(
        id=model.id,
        name=model.name,
        email=model.email,
        phone_number=model.phone_number,
        password_hash=model.password_hash,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class MemberRepository:
    """Repository for member database operations.

    Every storage failure is re-raised as MemberRepositoryError naming the
    operation, chained to the underlying error.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def exists_by_email(self, email: str) -> bool:
        """Check if a member with this email exists.

        Args:
            email: Email to check.

        Returns:
            True if the email is taken, False otherwise.
        """
        try:
            result = await self.session.execute(
                select(MemberModel.id).where(MemberModel.email == email).limit(1)
            )
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise MemberRepositoryError("exists_by_email", type(e).__name__) from e

    async def create(self, name: str, email: str, phone_number: str, password_hash: str) -> Member:
        """Insert a new member.

        Args:
            name: Display name.
            email: Email address.
            phone_number: Mobile phone number.
            password_hash: Argon2 hash of the password.

        Returns:
            The created member with its assigned ID.

        Raises:
            DuplicateEmailError: If the email is already taken.
            MemberRepositoryError: On any other storage failure.
        """
        member = MemberModel(
            name=name,
            email=email,
            phone_number=phone_number,
            password_hash=password_hash,
        )
        self.session.add(member)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateEmailError("create", "email already registered") from e
        except SQLAlchemyError as e:
            raise MemberRepositoryError("create", type(e).__name__) from e
        # created_at is filled in by the database and not loaded after flush
        return Member(
            id=member.id,
            name=name,
            email=email,
            phone_number=phone_number,
            password_hash=password_hash,
        )

    async def get_by_email(self, email: str) -> Member | None:
        """Get a member by email.

        Args:
            email: Member's email address.

        Returns:
            Member if found, None otherwise.
        """
        try:
            result = await self.session.execute(
                select(MemberModel).where(MemberModel.email == email)
            )
            model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise MemberRepositoryError("get_by_email", type(e).__name__) from e
        return to_entity(model) if model is not None else None

    async def get_by_id(self, member_id: int) -> Member | None:
        """Get a member by ID.

        Args:
            member_id: Member ID.

        Returns:
            Member if found, None otherwise.
        """
        try:
            model = await self.session.get(MemberModel, member_id)
        except SQLAlchemyError as e:
            raise MemberRepositoryError("get_by_id", type(e).__name__) from e
        return to_entity(model) if model is not None else None
