"""Password hashing utility using Argon2.

Provides password hashing and verification using the Argon2id algorithm.
Hashing is CPU-bound, so the async wrappers run it in the threadpool.
"""

import secrets

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError
from starlette.concurrency import run_in_threadpool

# Argon2id with the library's recommended parameters
_hasher = PasswordHasher()

# Verified against when a login email is unknown, so both failure paths
# spend the same time hashing.
DUMMY_PASSWORD_HASH = _hasher.hash(secrets.token_urlsafe(16))


class PasswordHashingError(Exception):
    """Raised when the hashing library fails to produce a hash."""

    pass


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Raises:
        PasswordHashingError: If the library fails to hash.

    Example:
        >>> hashed = hash_password("prayer1234")
        >>> hashed.startswith("$argon2id$")
        True
    """
    try:
        return _hasher.hash(password)
    except HashingError as e:
        raise PasswordHashingError("Failed to hash password") from e


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Comparison is constant-time inside argon2. Malformed or foreign hashes
    are treated as a mismatch.

    Args:
        password: The plaintext password to verify.
        hashed: The hashed password to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    try:
        return _hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash was made with outdated parameters.

    Args:
        hashed: The hashed password to check.

    Returns:
        True if the hash should be updated, False otherwise.
    """
    try:
        return _hasher.check_needs_rehash(hashed)
    except InvalidHashError:
        return True


async def hash_password_async(password: str) -> str:
    """Hash a password in the threadpool."""
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(password: str, hashed: str) -> bool:
    """Verify a password in the threadpool."""
    return await run_in_threadpool(verify_password, password, hashed)
