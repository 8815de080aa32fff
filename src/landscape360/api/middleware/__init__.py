"""API middleware components."""

from .auth import AuthenticationMiddleware
from .errors import ErrorHandlingMiddleware
from .logging import RequestLoggingMiddleware
from .tenant import TenantResolutionMiddleware

__all__ = [
    "AuthenticationMiddleware",
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "TenantResolutionMiddleware",
]
