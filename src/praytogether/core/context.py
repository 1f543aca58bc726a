"""Request-scoped context passed explicitly through the call chain.

The request middleware creates one RequestContext per request and stores it
on ``request.state``. Route handlers hand it to services as a parameter, so
the request logger and the authenticated identity travel with the call
instead of living in global state.
"""

import uuid
from dataclasses import dataclass, field

import structlog

from praytogether.core.logging import get_logger


def new_request_id() -> str:
    return str(uuid.uuid4())


@dataclass
class RequestContext:
    """Per-request values shared by handlers, services and repositories.

    Attributes:
        request_id: Correlation ID echoed in the X-Request-ID header.
        logger: Structured logger bound to the request ID.
        member_id: Authenticated member ID, set by the auth dependency.
        email: Authenticated member email, set by the auth dependency.
    """

    request_id: str = field(default_factory=new_request_id)
    logger: structlog.stdlib.BoundLogger | None = None
    member_id: int | None = None
    email: str | None = None

    def __post_init__(self) -> None:
        if self.logger is None:
            self.logger = get_logger("praytogether.request").bind(request_id=self.request_id)

    @property
    def is_authenticated(self) -> bool:
        return self.member_id is not None

    def authenticate(self, member_id: int, email: str) -> None:
        """Attach the caller's identity and bind it to the request logger."""
        self.member_id = member_id
        self.email = email
        self.logger = self.logger.bind(member_id=member_id)
