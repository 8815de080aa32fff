"""Request logging middleware."""

import time
from collections.abc import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from landscape360.core.logging import (
    bind_contextvars,
    get_logger,
    log_request_end,
    unbind_contextvars,
)

logger = get_logger("landscape360.api.requests")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a request id and logs every HTTP request.

    Runs outermost so that error responses produced by inner middleware
    carry the same request id that appears in the log entry.

    Sets:
        request.state.request_id: Incoming X-Request-ID, or a generated UUID
        X-Request-ID response header: For client correlation
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log request/response."""
        start_time = time.perf_counter()

        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        request_meta = self._capture_request_metadata(request)

        bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            unbind_contextvars("request_id")

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        self._log_request(request, response, request_meta, duration_ms)

        return response

    def _capture_request_metadata(self, request: Request) -> dict:
        """Capture metadata from the incoming request."""
        return {
            "method": request.method,
            "path": request.url.path,
            "query": str(request.url.query) if request.url.query else None,
            "host": request.headers.get("Host"),
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("User-Agent"),
        }

    def _get_client_ip(self, request: Request) -> str | None:
        """Extract client IP from request, considering proxy headers."""
        # Check X-Forwarded-For first (for reverse proxies)
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # Take first IP in the chain (original client)
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return None

    def _log_request(
        self,
        request: Request,
        response: Response,
        request_meta: dict,
        duration_ms: float,
    ) -> None:
        """Log the completed request."""
        tenant_id = getattr(request.state, "tenant_id", None)

        log_request_end(
            logger,
            request_meta["method"],
            request_meta["path"],
            response.status_code,
            duration_ms,
            request_id=request.state.request_id,
            tenant_id=str(tenant_id) if tenant_id else None,
            host=request_meta["host"],
            client_ip=request_meta["client_ip"],
            user_agent=request_meta["user_agent"],
        )
