"""Authentication infrastructure components.

This module provides password hashing, JWT token services, and
other authentication-related utilities.
"""

from praytogether.infrastructure.auth.jwt_service import (
    InvalidClaimsError,
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    TokenManager,
    TokenSigningError,
    get_jwt_service,
)
from praytogether.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    PasswordHashingError,
    hash_password,
    hash_password_async,
    needs_rehash,
    verify_password,
    verify_password_async,
)
from praytogether.infrastructure.auth.token_types import (
    AuthenticatedMember,
    TokenClaims,
    TokenType,
)

__all__ = [
    "AuthenticatedMember",
    "DUMMY_PASSWORD_HASH",
    "InvalidClaimsError",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "PasswordHashingError",
    "TokenClaims",
    "TokenExpiredError",
    "TokenManager",
    "TokenSigningError",
    "TokenType",
    "get_jwt_service",
    "hash_password",
    "hash_password_async",
    "needs_rehash",
    "verify_password",
    "verify_password_async",
]
