"""HTTP middleware package."""

from praytogether.infrastructure.api.middleware.request_context_middleware import (
    REQUEST_ID_HEADER,
    RequestContextMiddleware,
)
from praytogether.infrastructure.api.middleware.timeout_middleware import (
    RequestTimeoutMiddleware,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestContextMiddleware",
    "RequestTimeoutMiddleware",
]
