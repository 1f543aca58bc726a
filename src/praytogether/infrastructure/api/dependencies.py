"""FastAPI dependencies for request context and authentication.

Also defines the authentication errors raised when a protected route
receives no token or an unusable one.
"""

from typing import Annotated

from fastapi import Depends, Request

from praytogether.core.context import RequestContext
from praytogether.core.errors import DomainError, ErrorRegistry, ErrorResponse
from praytogether.infrastructure.auth import (
    AuthenticatedMember,
    InvalidClaimsError,
    InvalidTokenError,
    TokenExpiredError,
    TokenManager,
    TokenType,
    get_jwt_service,
)

AUTHORIZATION_HEADER = "Authorization"
BEARER_SCHEME = "bearer"

LOGIN_REQUIRED_MESSAGE = "Please log in."


class MissingTokenError(DomainError):
    """Raised when a protected route is called without a token."""

    info = "MISSING_TOKEN"


class InvalidTokenAuthError(DomainError):
    """Raised when the token is malformed, forged or of the wrong type."""

    info = "INVALID_TOKEN"


class ExpiredTokenAuthError(DomainError):
    """Raised when the token has expired."""

    info = "EXPIRED_TOKEN"


class InvalidClaimsAuthError(DomainError):
    """Raised when the token's claims cannot be used."""

    info = "INVALID_CLAIMS"


def register_error_responses(registry: ErrorRegistry) -> None:
    """Register the HTTP responses for authentication errors.

    Every failure renders the same response so clients only learn that
    they must log in again.
    """
    response = ErrorResponse(status=401, code="AUTH-000", message=LOGIN_REQUIRED_MESSAGE)
    for error in (MissingTokenError, InvalidTokenAuthError, ExpiredTokenAuthError, InvalidClaimsAuthError):
        registry.register(error.info, response)


def get_request_context(request: Request) -> RequestContext:
    """Get the context created by RequestContextMiddleware for this request."""
    ctx = getattr(request.state, "context", None)
    if ctx is None:
        ctx = RequestContext()
        request.state.context = ctx
    return ctx


def get_token_manager(request: Request) -> TokenManager:
    """Get the token manager the application was built with."""
    token_manager = getattr(request.app.state, "token_manager", None)
    return token_manager if token_manager is not None else get_jwt_service()


def _is_valid_member_id(subject: str) -> bool:
    return subject.isdecimal() and int(subject) > 0


async def get_current_member(
    request: Request,
    ctx: Annotated[RequestContext, Depends(get_request_context)],
    token_manager: Annotated[TokenManager, Depends(get_token_manager)],
) -> AuthenticatedMember:
    """Authenticate the caller from the ``Authorization: Bearer`` header.

    Only access tokens are accepted. On success the member is attached to
    the request context.

    Raises:
        MissingTokenError: If the header is absent.
        InvalidTokenAuthError: If the header or token is invalid.
        ExpiredTokenAuthError: If the token has expired.
        InvalidClaimsAuthError: If the claims are unusable.
    """
    request_info = {
        "client_ip": request.client.host if request.client else None,
        "method": request.method,
        "path": request.url.path,
        "user_agent": request.headers.get("user-agent"),
    }

    header = request.headers.get(AUTHORIZATION_HEADER)
    if not header:
        ctx.logger.warning("Token extraction failed", step="extract_token", error="missing token", **request_info)
        raise MissingTokenError()

    parts = header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME or not parts[1]:
        ctx.logger.warning(
            "Token extraction failed", step="extract_token", error="invalid authorization header", **request_info
        )
        raise InvalidTokenAuthError()

    try:
        claims = token_manager.validate(parts[1], expected_type=TokenType.ACCESS)
    except TokenExpiredError as e:
        ctx.logger.warning("Token validation failed", step="validate_token", error=str(e), **request_info)
        raise ExpiredTokenAuthError() from e
    except InvalidClaimsError as e:
        ctx.logger.warning("Token validation failed", step="validate_token", error=str(e), **request_info)
        raise InvalidClaimsAuthError() from e
    except InvalidTokenError as e:
        ctx.logger.warning("Token validation failed", step="validate_token", error=str(e), **request_info)
        raise InvalidTokenAuthError() from e

    if not _is_valid_member_id(claims.member_id):
        ctx.logger.warning(
            "Token validation failed", step="validate_token", error="member id is not a positive integer", **request_info
        )
        raise InvalidClaimsAuthError()

    member_id = int(claims.member_id)
    ctx.authenticate(member_id, claims.email)
    return AuthenticatedMember(member_id=member_id, email=claims.email)


# Type alias for dependency injection
CurrentMember = Annotated[AuthenticatedMember, Depends(get_current_member)]
RequestCtx = Annotated[RequestContext, Depends(get_request_context)]
