"""JWT token service.

Provides JWT token creation and validation for member authentication.
Supports access tokens and refresh tokens with configurable expiration.
Tokens are stateless: nothing is stored server-side.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Protocol

import jwt

from praytogether.core.config import Settings, get_settings
from praytogether.infrastructure.auth.token_types import TokenClaims, TokenType


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class InvalidClaimsError(JWTError):
    """Raised when a token's claims cannot be decoded into TokenClaims."""

    pass


class TokenSigningError(JWTError):
    """Raised when a token cannot be signed."""

    pass


class TokenManager(Protocol):
    """Capability interface for issuing and validating member tokens."""

    def issue_access_token(self, member_id: str, email: str) -> str: ...

    def issue_refresh_token(self, member_id: str, email: str) -> str: ...

    def validate(self, token: str, expected_type: TokenType | None = None) -> TokenClaims: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JWTService:
    """Service for creating and validating JWT tokens.

    Only HS256 is accepted when validating, so tokens signed with any other
    algorithm (including ``none``) are rejected.
    """

    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("exp", "iat", "iss", "sub")

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        access_token_ttl: timedelta,
        refresh_token_ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Symmetric secret used to sign tokens.
            issuer: Value of the ``iss`` claim; validated on decode.
            access_token_ttl: Lifetime of access tokens.
            refresh_token_ttl: Lifetime of refresh tokens.
            clock: Source of the current UTC time.
        """
        self._secret_key = secret_key
        self.issuer = issuer
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "JWTService":
        """Build a service from application settings."""
        settings = settings or get_settings()
        return cls(
            secret_key=settings.jwt_secret_key,
            issuer=settings.app_name,
            access_token_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_token_ttl=timedelta(days=settings.refresh_token_expire_days),
        )

    def issue_access_token(self, member_id: str, email: str) -> str:
        """Create an access token.

        Args:
            member_id: The member's identifier (string form).
            email: The member's email address.

        Returns:
            Encoded JWT access token.

        Raises:
            TokenSigningError: If the token cannot be signed.
        """
        return self._issue(member_id, email, TokenType.ACCESS, self.access_token_ttl)

    def issue_refresh_token(self, member_id: str, email: str) -> str:
        """Create a refresh token.

        Args:
            member_id: The member's identifier (string form).
            email: The member's email address.

        Returns:
            Encoded JWT refresh token.

        Raises:
            TokenSigningError: If the token cannot be signed.
        """
        return self._issue(member_id, email, TokenType.REFRESH, self.refresh_token_ttl)

    def _issue(
        self, member_id: str, email: str, token_type: TokenType, ttl: timedelta
    ) -> str:
        now = self._clock()
        payload = {
            "iss": self.issuer,
            "sub": member_id,
            "iat": now,
            "exp": now + ttl,
            "member_id": member_id,
            "email": email,
            "token_type": token_type.value,
        }
        try:
            return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenSigningError(f"Failed to sign {token_type.value} token") from e

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and verify a JWT token.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidClaimsError: If a required claim is missing.
            InvalidTokenError: If the token is invalid.
        """
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.issuer,
                options={"require": list(self.REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.MissingRequiredClaimError as e:
            raise InvalidClaimsError(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate(self, token: str, expected_type: TokenType | None = None) -> TokenClaims:
        """Validate a token and return its claims.

        Args:
            token: The encoded JWT token.
            expected_type: If given, the token must carry this type.

        Returns:
            The decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidClaimsError: If the claim structure cannot be decoded.
            InvalidTokenError: If the signature, format, issuer or type is wrong.
        """
        payload = self.decode_token(token)
        claims = self._claims_from_payload(payload)

        if expected_type is not None and claims.token_type != expected_type:
            raise InvalidTokenError(f"Not an {expected_type.value} token")
        return claims

    def _claims_from_payload(self, payload: dict[str, Any]) -> TokenClaims:
        try:
            member_id = payload["member_id"]
            email = payload["email"]
            if not isinstance(member_id, str) or not isinstance(email, str):
                raise TypeError("member_id and email must be strings")
            if member_id != payload["sub"]:
                raise ValueError("member_id does not match subject")
            return TokenClaims(
                member_id=member_id,
                email=email,
                token_type=TokenType(payload["token_type"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                issuer=payload["iss"],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidClaimsError(f"Invalid token claims: {e}") from e


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get the default JWT service built from settings."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService.from_settings()
    return _jwt_service
