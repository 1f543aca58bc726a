"""Command-line interface for the Pray Together API.

This module provides the CLI commands for running and managing
the application.
"""

from typing import NoReturn

import click

from praytogether import __version__
from praytogether.core.config import get_settings
from praytogether.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="praytogether")
def cli() -> None:
    """Pray Together API - member signup, login and profiles.

    Settings are read from PRAYTOGETHER_* environment variables and .env.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        raise click.BadParameter("SQLite requires a single worker", param_hint="--workers")

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting Pray Together server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "praytogether.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


@cli.command("init-db")
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create the database tables.

    Use this only in development. In production, run ``alembic upgrade head``.
    """
    import asyncio

    from praytogether.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = get_db_manager()
        try:
            if not await db.check_connection():
                raise click.ClickException("Failed to connect to database")
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
def info() -> None:
    """Display configuration and system information."""
    from sqlalchemy.engine import make_url

    settings = get_settings()
    database_url = make_url(settings.database_url).render_as_string(hide_password=True)

    click.echo(f"""
Pray Together API v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}
  Timeout:      {settings.request_timeout_seconds} seconds

Database:
  URL:          {database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes
  Refresh Exp:  {settings.refresh_token_expire_days} days

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `praytogether` command is run
    or when using `python -m praytogether`.
    """
    cli()


if __name__ == "__main__":
    main()
