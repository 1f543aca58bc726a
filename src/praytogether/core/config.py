"""Configuration management for the Pray Together API.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production-use-openssl-rand-hex-32"
MIN_JWT_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PRAYTOGETHER_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "pray-together-api"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    workers: int = 1
    request_timeout_seconds: float = 30.0
    health_check_timeout_seconds: float = 5.0

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/praytogether.db"
    db_pool_size: int = 10
    db_max_overflow: int = 90
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False
    db_auto_create: bool = True
    db_slow_query_threshold_ms: int = 200

    # Security Settings
    jwt_secret_key: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="Secret key for JWT token signing",
    )
    access_token_expire_minutes: int = 24 * 60
    refresh_token_expire_days: int = 7

    # CORS Settings
    cors_origins: Annotated[list[str], NoDecode] = Field(default=["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: Annotated[list[str], NoDecode] = Field(default=["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    cors_allow_headers: Annotated[list[str], NoDecode] = Field(default=["*"])
    cors_max_age: int = 86400

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("cors_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse list settings from a JSON array, a comma-separated string or a list."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @model_validator(mode="after")
    def validate_jwt_settings(self) -> "Settings":
        """Reject weak JWT secrets in production and inverted token lifetimes."""
        if self.is_production:
            if self.jwt_secret_key == DEFAULT_JWT_SECRET:
                raise ValueError("jwt_secret_key must be set in production")
            if len(self.jwt_secret_key) < MIN_JWT_SECRET_LENGTH:
                raise ValueError(
                    f"jwt_secret_key must be at least {MIN_JWT_SECRET_LENGTH} characters"
                )
        if self.refresh_token_expire_days * 24 * 60 <= self.access_token_expire_minutes:
            raise ValueError("refresh token lifetime must exceed access token lifetime")
        return self

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def database_url_sync(self) -> str:
        """Get synchronous database URL for migrations."""
        url = self.database_url
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite")
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql")
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
