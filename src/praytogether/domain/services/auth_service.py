"""Authentication service for member signup and login.

Also defines the credential error and its HTTP response.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from praytogether.core.context import RequestContext
from praytogether.core.errors import DomainError, ErrorRegistry, ErrorResponse
from praytogether.domain.services.member_service import MemberAlreadyExistsError
from praytogether.infrastructure.api.schemas.auth_schemas import LoginRequest, SignupRequest
from praytogether.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    TokenManager,
    hash_password_async,
    needs_rehash,
    verify_password_async,
)
from praytogether.infrastructure.persistence.database import transaction
from praytogether.infrastructure.persistence.repositories import (
    DuplicateEmailError,
    MemberRepository,
)


class IncorrectEmailPasswordError(DomainError):
    """Raised for an unknown email or a wrong password.

    Both cases share one error so callers cannot tell which emails exist.
    """

    info = "INCORRECT_EMAIL_PASSWORD"


def register_error_responses(registry: ErrorRegistry) -> None:
    """Register the HTTP responses for login errors."""
    registry.register(
        IncorrectEmailPasswordError.info,
        ErrorResponse(status=400, code="AUTH-003", message="Email or password is incorrect."),
    )


@dataclass(frozen=True)
class LoginResult:
    """Token pair issued on successful login."""

    access_token: str
    refresh_token: str


class AuthService:
    """Service orchestrating signup and login.

    Uses the member repository for storage, the password hasher for
    credentials and the token manager to issue JWTs.
    """

    def __init__(self, session: AsyncSession, token_manager: TokenManager) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
            token_manager: Issues access and refresh tokens.
        """
        self.session = session
        self.token_manager = token_manager
        self.member_repo = MemberRepository(session)

    async def signup(self, ctx: RequestContext, request: SignupRequest) -> None:
        """Register a new member.

        The existence check, hashing and insert run in one transaction.
        Nothing is written if any step fails.

        Args:
            ctx: The request context.
            request: Validated signup data.

        Raises:
            MemberAlreadyExistsError: If the email is already registered.
            PasswordHashingError: If the password cannot be hashed.
            MemberRepositoryError: If storage fails.
        """
        log = ctx.logger
        email = request.email

        async with transaction(self.session):
            if await self.member_repo.exists_by_email(email):
                log.warning("Member already exists", email=email)
                raise MemberAlreadyExistsError()

            try:
                password_hash = await hash_password_async(request.password)
            except Exception as e:
                log.error("Failed to hash password", error=str(e))
                raise

            try:
                member = await self.member_repo.create(
                    name=request.name,
                    email=email,
                    phone_number=request.phone_number,
                    password_hash=password_hash,
                )
            except DuplicateEmailError as e:
                # Lost a race with a concurrent signup for the same email
                log.warning("Member already exists", email=email)
                raise MemberAlreadyExistsError() from e
            except Exception as e:
                log.error("Failed to create member", error=str(e))
                raise

        log.info("Member created successfully", email=email, new_member_id=member.id)

    async def login(self, ctx: RequestContext, request: LoginRequest) -> LoginResult:
        """Authenticate a member and issue a token pair.

        Args:
            ctx: The request context.
            request: Validated login data.

        Returns:
            Access and refresh tokens.

        Raises:
            IncorrectEmailPasswordError: If the email is unknown or the password is wrong.
            MemberRepositoryError: If the lookup fails.
            TokenSigningError: If a token cannot be signed.
        """
        log = ctx.logger
        email = request.email

        try:
            member = await self.member_repo.get_by_email(email)
        except Exception as e:
            log.error("Login failed - unexpected error", error=str(e))
            raise

        if member is None:
            # Same hashing cost as a real check so response time does not reveal the email
            await verify_password_async(request.password, DUMMY_PASSWORD_HASH)
            log.warning("Login failed - email not found", email=email)
            raise IncorrectEmailPasswordError()

        if not await verify_password_async(request.password, member.password_hash):
            log.warning("Login failed - invalid password", email=email)
            raise IncorrectEmailPasswordError()

        if needs_rehash(member.password_hash):
            log.info("Password hash uses outdated parameters", email=email)

        member_id = str(member.id)
        try:
            access_token = self.token_manager.issue_access_token(member_id, member.email)
            refresh_token = self.token_manager.issue_refresh_token(member_id, member.email)
        except Exception as e:
            log.error("Failed to issue tokens", error=str(e))
            raise

        log.info("Login successful", email=email)
        return LoginResult(access_token=access_token, refresh_token=refresh_token)
