"""Authentication middleware for bearer token validation."""

import re
from collections.abc import Callable
from datetime import UTC, datetime

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from landscape360.api.schemas.errors import APIError, ErrorCode
from landscape360.config.settings import get_settings
from landscape360.core.exceptions import AuthenticationError
from landscape360.core.logging import get_logger
from landscape360.core.tokens import decode_access_token

logger = get_logger("landscape360.api.auth")

_BEARER = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Middleware that validates an optional Bearer token.

    Requests without an Authorization header continue anonymously; routes
    that need a user enforce it through dependencies. A header that is
    present but invalid is rejected with 401.

    Sets:
        request.state.principal: Principal for the token, or None
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and attach the authenticated principal."""
        request.state.principal = None

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return await call_next(request)

        match = _BEARER.match(auth_header)
        if not match:
            return self._unauthorized_response(
                request, "Invalid Authorization header format"
            )

        settings = getattr(request.app.state, "settings", None) or get_settings()
        try:
            request.state.principal = decode_access_token(match.group(1), settings)
        except AuthenticationError as e:
            logger.info("authentication_failed", reason=e.reason, path=request.url.path)
            return self._unauthorized_response(request, e.reason)

        return await call_next(request)

    def _unauthorized_response(self, request: Request, message: str) -> JSONResponse:
        """Create a 401 unauthorized response."""
        error = APIError(
            error_code=ErrorCode.UNAUTHORIZED.value,
            message=message,
            details=None,
            request_id=str(getattr(request.state, "request_id", "unknown")),
            timestamp=datetime.now(UTC),
        )

        return JSONResponse(
            status_code=401,
            content=error.model_dump(mode="json"),
            headers={"WWW-Authenticate": "Bearer"},
        )
