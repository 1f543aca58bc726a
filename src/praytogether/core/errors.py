"""Domain errors and the registry that maps them to HTTP error responses.

Any layer raises a named DomainError; the outermost exception handler makes
a single lookup in the ErrorRegistry to render it. Feature modules register
their responses while the application is built, after which the registry is
frozen and only read.
"""

from dataclasses import asdict, dataclass
from typing import Any


class DomainError(Exception):
    """Base class for named failure conditions.

    Subclasses set ``info``, the stable identifier used as the registry key.
    """

    info: str = "DOMAIN_ERROR"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.info)

    @classmethod
    def define(cls, info: str, name: str | None = None) -> type["DomainError"]:
        """Create a DomainError subclass bound to ``info``.

        Args:
            info: Stable identifier for the error.
            name: Optional class name. Derived from ``info`` if omitted.

        Returns:
            The new exception class.
        """
        class_name = name or "".join(part.capitalize() for part in info.split("_")) + "Error"
        return type(class_name, (cls,), {"info": info})


@dataclass(frozen=True)
class ErrorResponse:
    """JSON body for error responses: ``{status, code, message}``."""

    status: int
    code: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


VALIDATION_FAILED = ErrorResponse(
    status=400,
    code="ERROR-001",
    message="The request is invalid.",
)
INVALID_REQUEST = ErrorResponse(
    status=400,
    code="ERROR-002",
    message="The request format is invalid.",
)
INTERNAL_SERVER_ERROR = ErrorResponse(
    status=500,
    code="ERROR-003",
    message="An internal server error occurred.",
)
REQUEST_TIMEOUT = ErrorResponse(
    status=503,
    code="ERROR-004",
    message="The request took too long to process.",
)


class ErrorRegistry:
    """Write-once, read-many mapping from error identifier to ErrorResponse."""

    def __init__(self) -> None:
        self._responses: dict[str, ErrorResponse] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, info: str, response: ErrorResponse) -> None:
        """Register the response rendered for ``info``.

        Registering the same response twice is a no-op.

        Raises:
            RuntimeError: If the registry has been frozen.
            ValueError: If ``info`` is already bound to a different response.
        """
        if self._frozen:
            raise RuntimeError(f"Cannot register '{info}': error registry is frozen")

        existing = self._responses.get(info)
        if existing is not None and existing != response:
            raise ValueError(f"Error '{info}' is already registered as {existing}")
        self._responses[info] = response

    def freeze(self) -> "ErrorRegistry":
        self._frozen = True
        return self

    def lookup(self, info: str) -> ErrorResponse | None:
        return self._responses.get(info)

    def resolve(self, exc: BaseException | None) -> ErrorResponse | None:
        """Find the response registered for the first DomainError in the chain.

        Follows ``__cause__`` and then ``__context__`` links.

        Args:
            exc: The raised exception.

        Returns:
            The registered response, or None when no DomainError in the chain
            has a registered identifier. Callers then render
            INTERNAL_SERVER_ERROR.
        """
        seen: set[int] = set()
        current = exc
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            if isinstance(current, DomainError):
                return self._responses.get(current.info)
            current = current.__cause__ or current.__context__
        return None

    def __contains__(self, info: object) -> bool:
        return info in self._responses

    def __len__(self) -> int:
        return len(self._responses)
