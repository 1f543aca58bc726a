"""Per-request deadline middleware.

When a request runs past the deadline, the downstream work is cancelled
and the client receives 503 ERROR-004.
"""

import asyncio

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from praytogether.core.errors import REQUEST_TIMEOUT
from praytogether.core.logging import get_logger

logger = get_logger(__name__)


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Middleware enforcing a maximum processing time per request."""

    def __init__(self, app: ASGIApp, timeout_seconds: float) -> None:
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            ctx = getattr(request.state, "context", None)
            log = ctx.logger if ctx is not None else logger
            log.warning(
                "Request deadline exceeded",
                method=request.method,
                path=request.url.path,
                timeout_seconds=self.timeout_seconds,
            )
            return JSONResponse(
                status_code=REQUEST_TIMEOUT.status,
                content=REQUEST_TIMEOUT.to_dict(),
            )
