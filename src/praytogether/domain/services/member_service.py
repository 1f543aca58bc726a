"""Member service for profile lookup.

Also defines the member domain errors and their HTTP responses.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from praytogether.core.context import RequestContext
from praytogether.core.errors import DomainError, ErrorRegistry, ErrorResponse
from praytogether.infrastructure.api.schemas.member_schemas import MemberProfileResponse
from praytogether.infrastructure.persistence.database import transaction
from praytogether.infrastructure.persistence.repositories import MemberRepository


class MemberNotFoundError(DomainError):
    """Raised when no member exists for the requested ID."""

    info = "MEMBER_NOT_FOUND"


class MemberAlreadyExistsError(DomainError):
    """Raised when signing up with an email that is already registered."""

    info = "MEMBER_ALREADY_EXISTS"


def register_error_responses(registry: ErrorRegistry) -> None:
    """Register the HTTP responses for member errors."""
    registry.register(
        MemberNotFoundError.info,
        ErrorResponse(status=404, code="MEMBER-001", message="Member not found."),
    )
    registry.register(
        MemberAlreadyExistsError.info,
        ErrorResponse(status=409, code="MEMBER-002", message="This member is already registered."),
    )


class MemberService:
    """Service for reading member profiles."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.member_repo = MemberRepository(session)

    async def get_profile(self, ctx: RequestContext, member_id: int) -> MemberProfileResponse:
        """Get the public profile of a member.

        Args:
            ctx: The request context.
            member_id: ID of the member to look up.

        Returns:
            The member's profile, without the password hash.

        Raises:
            MemberNotFoundError: If no member has this ID.
            MemberRepositoryError: If the lookup fails.
        """
        log = ctx.logger
        async with transaction(self.session):
            try:
                member = await self.member_repo.get_by_id(member_id)
            except Exception as e:
                log.error("Failed to look up member", error=str(e))
                raise

            if member is None:
                log.warning("Member not found", lookup_member_id=member_id)
                raise MemberNotFoundError()

        return MemberProfileResponse.from_member(member)
