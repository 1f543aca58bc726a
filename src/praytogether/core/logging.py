"""Structured JSON logging with request IDs.

This module configures structlog for structured JSON logging with
request ID tracking and masking of personal data.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from praytogether.core.config import get_settings
from praytogether.domain.services.pii_masking_service import REDACTED, PIIMaskingService

EMAIL_FIELDS = frozenset({"email", "member_email", "user_email"})
PHONE_FIELDS = frozenset({"phone", "phone_number", "phoneNumber"})
SECRET_FIELDS = frozenset({"password", "password_hash", "token", "access_token", "refresh_token"})


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log entry.

    Args:
        logger: Logger instance.
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with logger name.
    """
    event_dict.setdefault(
        "logger", logger.name if hasattr(logger, "name") else "praytogether"
    )
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' field to 'message' for compatibility.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with message field.
    """
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def mask_sensitive_fields(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask personal data and drop secrets before rendering.

    Email and phone fields are partially masked, secrets are replaced
    with a redaction marker.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Event dictionary safe to write.
    """
    for key, value in event_dict.items():
        if not isinstance(value, str):
            continue
        if key in EMAIL_FIELDS:
            event_dict[key] = PIIMaskingService.mask_email(value)
        elif key in PHONE_FIELDS:
            event_dict[key] = PIIMaskingService.mask_phone(value)
        elif key in SECRET_FIELDS:
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(settings: Any | None = None) -> None:
    """Configure structured logging for the application.

    Sets up structlog with JSON formatting for production and
    console formatting for development.

    Args:
        settings: Optional settings instance. If not provided, will load from environment.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        mask_sensitive_fields,
        rename_message_field,
    ]

    if settings.is_development or settings.log_format == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
        # format_exc_info is replaced by the console exception formatter
        shared_processors.remove(structlog.processors.format_exc_info)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not settings.is_development,
    )

    # Configure standard logging for third-party libraries
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses 'praytogether'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    return structlog.get_logger(name or "praytogether")


def bind_request_id(request_id: str) -> None:
    """Bind a request ID to the current logging context.

    Called by request middleware so that log lines emitted outside the
    request-scoped logger still carry the request ID.

    Args:
        request_id: The request ID to bind to the context.
    """
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_context() -> None:
    """Clear all context variables from the current logging context.

    Called at the end of a request to ensure context doesn't leak
    between requests.
    """
    structlog.contextvars.clear_contextvars()
