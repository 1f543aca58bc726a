"""Persistence repositories for database operations."""

from praytogether.infrastructure.persistence.repositories.member_repository import (
    DuplicateEmailError,
    MemberRepository,
    MemberRepositoryError,
)

__all__ = [
    "DuplicateEmailError",
    "MemberRepository",
    "MemberRepositoryError",
]
