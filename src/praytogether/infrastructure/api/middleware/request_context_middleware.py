"""Middleware that creates the request context and logs every request.

Each request gets a RequestContext with a request ID (taken from the
X-Request-ID header or generated), which is echoed back on the response.
Exceptions that escape the route are logged with full detail and rendered
as a generic internal error.
"""

import time

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from praytogether.core.context import RequestContext, new_request_id
from praytogether.core.errors import INTERNAL_SERVER_ERROR
from praytogether.core.logging import bind_request_id, clear_context

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set up the RequestContext for every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request with a fresh context.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint to call.

        Returns:
            The response, carrying the X-Request-ID header.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        ctx = RequestContext(request_id=request_id)
        request.state.context = ctx
        bind_request_id(request_id)

        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as e:
                ctx.logger.exception(
                    "Unhandled exception",
                    method=request.method,
                    path=request.url.path,
                    error=str(e),
                    exc_type=type(e).__name__,
                )
                response = JSONResponse(
                    status_code=INTERNAL_SERVER_ERROR.status,
                    content=INTERNAL_SERVER_ERROR.to_dict(),
                )

            response.headers[REQUEST_ID_HEADER] = request_id
            self._log_request(ctx, request, response.status_code, start)
            return response
        finally:
            clear_context()

    @staticmethod
    def _log_request(ctx: RequestContext, request: Request, status_code: int, start: float) -> None:
        fields = {
            "method": request.method,
            "path": request.url.path,
            "status": status_code,
            "latency_ms": round((time.perf_counter() - start) * 1000, 2),
            "ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent"),
        }
        if request.url.query:
            fields["query"] = request.url.query

        if status_code >= 500:
            ctx.logger.error("Request processed", **fields)
        elif status_code >= 400:
            ctx.logger.warning("Request processed", **fields)
        else:
            ctx.logger.info("Request processed", **fields)
