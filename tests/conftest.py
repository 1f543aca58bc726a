"""Pytest configuration for all tests."""

import os

# Must be set before any praytogether module reads settings
os.environ.setdefault("PRAYTOGETHER_ENVIRONMENT", "testing")

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from praytogether.core.config import Settings
from praytogether.core.context import RequestContext
from praytogether.infrastructure.auth import (
    InvalidTokenError,
    JWTService,
    TokenClaims,
    TokenType,
)
from praytogether.infrastructure.persistence import models  # noqa: F401
from praytogether.infrastructure.persistence.database import Base, DatabaseManager, get_db_manager

TEST_JWT_SECRET = "test-secret-key-for-pray-together-0123456789"


@pytest.fixture
def settings() -> Settings:
    """Settings for tests, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        jwt_secret_key=TEST_JWT_SECRET,
        database_url="sqlite+aiosqlite:///:memory:",
        db_auto_create=False,
    )


@pytest.fixture
def token_manager(settings: Settings) -> JWTService:
    return JWTService.from_settings(settings)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
        hide_parameters=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_manager(settings: Settings, engine: AsyncEngine) -> DatabaseManager:
    return DatabaseManager(settings=settings, engine=engine)


@pytest_asyncio.fixture
async def db_session(db_manager: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def ctx() -> RequestContext:
    return RequestContext(request_id="test-request-id")


@pytest.fixture
def app(settings: Settings, token_manager: JWTService, db_manager: DatabaseManager):
    """Application wired to the in-memory database."""
    from praytogether.infrastructure.api.app import create_app

    app = create_app(settings, token_manager=token_manager)
    app.dependency_overrides[get_db_manager] = lambda: db_manager
    yield app
    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client for the application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def signup_payload() -> dict[str, str]:
    return {
        "name": "Kim Minsu",
        "email": "minsu@example.com",
        "phoneNumber": "010-1234-5678",
        "password": "prayer1234",
    }


@dataclass
class FakeTokenManager:
    """Token manager that issues readable fake tokens.

    Tokens look like ``access:<member_id>:<email>``.
    """

    fail_on_issue: bool = False
    issued: list[tuple[str, str, str]] = field(default_factory=list)

    def issue_access_token(self, member_id: str, email: str) -> str:
        return self._issue(TokenType.ACCESS, member_id, email)

    def issue_refresh_token(self, member_id: str, email: str) -> str:
        return self._issue(TokenType.REFRESH, member_id, email)

    def _issue(self, token_type: TokenType, member_id: str, email: str) -> str:
        if self.fail_on_issue:
            raise RuntimeError("signing key unavailable")
        self.issued.append((token_type.value, member_id, email))
        return f"{token_type.value}:{member_id}:{email}"

    def validate(self, token: str, expected_type: TokenType | None = None) -> TokenClaims:
        try:
            token_type, member_id, email = token.split(":", 2)
            claims_type = TokenType(token_type)
        except ValueError as e:
            raise InvalidTokenError("Invalid token") from e
        if expected_type is not None and claims_type != expected_type:
            raise InvalidTokenError("Wrong token type")
        now = datetime.now(timezone.utc)
        return TokenClaims(
            member_id=member_id,
            email=email,
            token_type=claims_type,
            issued_at=now,
            expires_at=now + timedelta(hours=1),
            issuer="fake",
        )


@pytest.fixture
def fake_token_manager() -> FakeTokenManager:
    return FakeTokenManager()
