"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. It supports both SQLite (aiosqlite) and
PostgreSQL (asyncpg) drivers.
"""

import asyncio
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncGenerator

from fastapi import Depends
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from praytogether.core.config import Settings, get_settings
from praytogether.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    All models should inherit from this class to get proper ORM mapping
    and metadata management.
    """

    pass


@dataclass
class DatabaseHealth:
    """Result of a database health check."""

    is_up: bool
    latency_ms: float
    error: str | None = None


def register_slow_query_logging(engine: AsyncEngine, threshold_ms: int) -> None:
    """Log statements that take longer than ``threshold_ms``.

    Args:
        engine: The async engine to instrument.
        threshold_ms: Slow query threshold in milliseconds.
    """
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _start_timer(conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool) -> None:
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(sync_engine, "after_cursor_execute")
    def _log_slow_query(conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool) -> None:
        started = conn.info["query_start_time"].pop()
        elapsed_ms = (time.perf_counter() - started) * 1000
        if elapsed_ms > threshold_ms:
            logger.warning(
                "Slow query",
                statement=statement,
                elapsed_ms=round(elapsed_ms, 2),
                threshold_ms=threshold_ms,
            )


class DatabaseManager:
    """Database connection and session manager.

    This class manages the async database engine and session factory.
    It provides context managers for database sessions and handles
    connection pooling.
    """

    def __init__(self, settings: Settings | None = None, engine: AsyncEngine | None = None) -> None:
        """Initialize the database manager.

        Args:
            settings: Settings to build the engine from. Defaults to the cached settings.
            engine: A ready engine to use instead of building one (used by tests).
        """
        self.settings = settings or get_settings()
        self._engine = engine
        self._session_factory = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine.

        Returns:
            AsyncEngine: SQLAlchemy async engine instance.
        """
        if self._engine is None:
            url = self.settings.database_url
            # Error messages must not include bound values such as emails or password hashes
            options: dict[str, Any] = {"echo": self.settings.db_echo, "hide_parameters": True}
            if url.startswith("sqlite"):
                options["connect_args"] = {"check_same_thread": False}
            else:
                # SQLite picks its own pool class, so pool sizing only applies elsewhere
                options.update(
                    pool_size=self.settings.db_pool_size,
                    max_overflow=self.settings.db_max_overflow,
                    pool_timeout=self.settings.db_pool_timeout,
                    pool_recycle=self.settings.db_pool_recycle,
                    pool_pre_ping=True,
                )
            self._engine = create_async_engine(url, **options)
            register_slow_query_logging(self._engine, self.settings.db_slow_query_threshold_ms)

            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
                pool_size=self.settings.db_pool_size,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory.

        Returns:
            async_sessionmaker: SQLAlchemy async session factory.
        """
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all database tables.

        Used on startup in development and by ``praytogether init-db``.
        In production, use migrations instead.
        """
        # Register models with Base.metadata
        from praytogether.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data. Only use in testing!
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        """Close the database engine and all connections.

        Should be called on application shutdown.
        """
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope for database operations.

        Yields:
            AsyncSession: SQLAlchemy async session.

        Example:
            async with db.session() as session:
                async with transaction(session):
                    session.add(member)
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False

    async def _ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def health_check(self, timeout: float) -> DatabaseHealth:
        """Ping the database within ``timeout`` seconds.

        Args:
            timeout: Maximum time to wait for the ping.

        Returns:
            DatabaseHealth with the measured latency, or the failure reason.
        """
        started = time.perf_counter()
        try:
            await asyncio.wait_for(self._ping(), timeout=timeout)
        except asyncio.TimeoutError:
            return DatabaseHealth(
                is_up=False,
                latency_ms=_elapsed_ms(started),
                error=f"database ping timed out after {timeout}s",
            )
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return DatabaseHealth(is_up=False, latency_ms=_elapsed_ms(started), error=str(e))
        return DatabaseHealth(is_up=True, latency_ms=_elapsed_ms(started))


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """Run a block as one unit of work.

    Commits when the block finishes and rolls back on any exception,
    which is then re-raised.

    Args:
        session: The session to commit or roll back.

    Yields:
        AsyncSession: The same session.
    """
    try:
        yield session
        await session.commit()
    except BaseException:
        await session.rollback()
        raise


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance.

    Returns:
        DatabaseManager: Global database manager instance.
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_db_session(
    db: DatabaseManager = Depends(get_db_manager),
) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get database session.

    Yields:
        AsyncSession: SQLAlchemy async session.

    Example:
        @router.get("/members/me")
        async def get_me(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with db.session() as session:
        yield session


async def init_database(db: DatabaseManager | None = None) -> DatabaseManager:
    """Initialize the database.

    This function should be called on application startup. It creates
    tables if auto-create is enabled (development). In production,
    migrations should be used instead.

    Args:
        db: Manager to initialize. Defaults to the global instance.

    Returns:
        The initialized manager.

    Raises:
        RuntimeError: If the database cannot be reached.
    """
    db = db or get_db_manager()
    settings = db.settings

    # Create database directory if using a file-backed SQLite database
    if settings.database_url.startswith("sqlite") and ":memory:" not in settings.database_url:
        db_file = Path(settings.database_url.split(":///")[-1])
        db_file.parent.mkdir(parents=True, exist_ok=True)

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    if settings.db_auto_create and not settings.is_production:
        logger.info("Auto-create enabled: creating database tables")
        await db.create_tables()
    else:
        logger.info("Skipping auto-create, use migrations")
    return db


async def close_database(db: DatabaseManager | None = None) -> None:
    """Close the database connection.

    This function should be called on application shutdown.
    """
    db = db or get_db_manager()
    await db.disconnect()
