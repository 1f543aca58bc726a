"""API Routes for Pray Together."""

from praytogether.infrastructure.api.routes.auth_router import router as auth_router
from praytogether.infrastructure.api.routes.members_router import router as members_router

__all__ = [
    "auth_router",
    "members_router",
]
