"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
error handling and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from praytogether.core.config import Settings, get_settings
from praytogether.core.context import RequestContext
from praytogether.core.errors import INTERNAL_SERVER_ERROR, DomainError, ErrorRegistry, ErrorResponse
from praytogether.core.logging import configure_logging, get_logger
from praytogether.domain.services import auth_service, member_service
from praytogether.infrastructure.api import dependencies
from praytogether.infrastructure.api.middleware import RequestContextMiddleware, RequestTimeoutMiddleware
from praytogether.infrastructure.api.validation import to_error_response
from praytogether.infrastructure.auth import JWTService, TokenManager
from praytogether.infrastructure.persistence.database import (
    DatabaseManager,
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)

    logger.info(
        "Starting Pray Together API",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database(get_db_manager())
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Pray Together API")
    await close_database(get_db_manager())
    logger.info("Database connection closed")


def build_error_registry() -> ErrorRegistry:
    """Collect the error responses of every feature and freeze them.

    Returns:
        ErrorRegistry: The frozen registry.
    """
    registry = ErrorRegistry()
    dependencies.register_error_responses(registry)
    auth_service.register_error_responses(registry)
    member_service.register_error_responses(registry)
    return registry.freeze()


def create_app(
    settings: Settings | None = None,
    token_manager: TokenManager | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Defaults to the cached settings.
        token_manager: Token manager to use. Defaults to a JWTService
            built from the settings.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Pray Together member and authentication API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.error_registry = build_error_registry()
    app.state.token_manager = token_manager or JWTService.from_settings(settings)

    register_health_check(app)

    register_routes(app)

    register_exception_handlers(app)

    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register the health check endpoint.

    Args:
        app: FastAPI application instance.
    """
    settings: Settings = app.state.settings

    @app.get("/health", tags=["health"])
    async def health_check(db: DatabaseManager = Depends(get_db_manager)):
        """Health check endpoint.

        Returns 200 when the database answers within the health check
        timeout, 503 otherwise.
        """
        health = await db.health_check(settings.health_check_timeout_seconds)

        if not health.is_up:
            logger.error("Health check failed", error=health.error)
            database: dict[str, object] = {"status": "down"}
            if settings.debug:
                database["error"] = health.error
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "service": {
                        "name": settings.app_name,
                        "environment": settings.environment,
                    },
                    "checks": {"database": database},
                },
            )

        return {
            "status": "healthy",
            "service": {
                "name": settings.app_name,
                "environment": settings.environment,
                "port": settings.port,
            },
            "checks": {
                "database": {
                    "status": "up",
                    "latency_ms": health.latency_ms,
                },
            },
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from praytogether.infrastructure.api.routes import auth_router, members_router

    settings: Settings = app.state.settings

    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])

    app.include_router(members_router, prefix=f"{settings.api_prefix}/members", tags=["members"])


def _error_json(response: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=response.status, content=response.to_dict())


def _request_logger(request: Request):
    ctx: RequestContext | None = getattr(request.state, "context", None)
    return ctx.logger if ctx is not None else logger


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Every error leaves the service as ``{status, code, message}``.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request body validation errors."""
        response = to_error_response(exc.errors())
        _request_logger(request).warning(
            "Request validation failed",
            path=request.url.path,
            code=response.code,
            error_message=response.message,
        )
        return _error_json(response)

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Render a domain error through the error registry."""
        registry: ErrorRegistry = request.app.state.error_registry
        response = registry.resolve(exc)
        if response is None:
            _request_logger(request).error(
                "Unregistered domain error",
                path=request.url.path,
                error_info=exc.info,
            )
            response = INTERNAL_SERVER_ERROR
        return _error_json(response)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        _request_logger(request).error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return _error_json(INTERNAL_SERVER_ERROR)


def register_middleware(app: FastAPI) -> None:
    """Register middleware.

    The last middleware added runs first, so CORS wraps the request
    context middleware, which wraps the timeout middleware.

    Args:
        app: FastAPI application instance.
    """
    settings: Settings = app.state.settings

    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.add_middleware(RequestContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=["X-Request-ID"],
        max_age=settings.cors_max_age,
    )


app = create_app()
