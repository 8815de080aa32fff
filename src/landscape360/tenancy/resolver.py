"""Tenant resolution for inbound requests.

Turns request metadata (host, override headers, path) into a TenantContext:

1. Admin route prefixes never carry a tenant.
2. The tenant key comes from ``X-Tenant-Subdomain``, else ``X-Tenant-Domain``
   (run through the domain extractor), else the ``Host`` header.
3. No key means a platform domain: empty context, not an error.
4. The key is looked up in the tenant directory; unknown keys raise
   TenantNotFoundError and inactive subscriptions raise TenantInactiveError.

Directory outages are retried with bounded exponential backoff and surface
as TenantDirectoryUnavailableError once the attempts are exhausted.
"""

import asyncio
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from starlette.requests import HTTPConnection

from landscape360.config.settings import Settings, get_settings
from landscape360.core.context import TenantContext, run_in_tenant_context
from landscape360.core.exceptions import (
    TenantDirectoryUnavailableError,
    TenantInactiveError,
    TenantNotFoundError,
)
from landscape360.core.logging import get_logger
from landscape360.db.schemas.tenant import TenantSnapshot
from landscape360.tenancy.directory import TenantDirectory
from landscape360.tenancy.domains import extract_tenant_key

logger = get_logger("landscape360.tenancy.resolver")

TENANT_SUBDOMAIN_HEADER = "X-Tenant-Subdomain"
TENANT_DOMAIN_HEADER = "X-Tenant-Domain"


@dataclass(frozen=True)
class TenantRequest:
    """Request metadata consumed by the resolver."""

    host: str | None = None
    header_subdomain: str | None = None
    header_domain: str | None = None
    path: str = "/"

    @classmethod
    def from_request(cls, request: HTTPConnection) -> "TenantRequest":
        """Build from a Starlette request (or websocket) connection."""
        headers = request.headers
        return cls(
            host=headers.get("host"),
            header_subdomain=headers.get(TENANT_SUBDOMAIN_HEADER),
            header_domain=headers.get(TENANT_DOMAIN_HEADER),
            path=request.url.path,
        )


class TenantResolver:
    """Resolves the tenant for a request and publishes it as tenant context.

    Example:
        resolver = TenantResolver(SQLAlchemyTenantDirectory(get_async_session))
        ctx = await resolver.resolve(TenantRequest(host="acme.delxn.club"))
    """

    def __init__(self, directory: TenantDirectory, settings: Settings | None = None):
        """Initialize the resolver.

        Args:
            directory: Tenant lookup store
            settings: Settings override (default: global settings)
        """
        self._directory = directory
        self._settings = settings or get_settings()

    @property
    def directory(self) -> TenantDirectory:
        return self._directory

    def is_exempt_path(self, path: str) -> bool:
        """Whether ``path`` belongs to an admin namespace that is never tenant-scoped."""
        return any(path.startswith(prefix) for prefix in self._settings.ADMIN_PATH_PREFIXES)

    def select_key(self, request: TenantRequest) -> str | None:
        """Pick the tenant key for a request, highest precedence first."""
        platform_hosts = self._settings.PLATFORM_HOSTS

        if request.header_subdomain:
            return request.header_subdomain.strip() or None
        if request.header_domain:
            key = extract_tenant_key(request.header_domain, platform_hosts)
            if key:
                return key
        return extract_tenant_key(request.host, platform_hosts)

    async def resolve(self, request: TenantRequest) -> TenantContext:
        """Resolve the tenant context for a request.

        Args:
            request: Request metadata

        Returns:
            TenantContext for the tenant, or an empty context for admin
            routes and platform domains

        Raises:
            TenantNotFoundError: If no tenant matches the key
            TenantInactiveError: If the tenant's subscription is inactive
            TenantDirectoryUnavailableError: If the directory stays unreachable
        """
        if self.is_exempt_path(request.path):
            logger.debug("tenant_resolution_skipped", reason="admin_path", path=request.path)
            return TenantContext.empty()

        key = self.select_key(request)
        if not key:
            logger.debug("tenant_resolution_skipped", reason="platform_host", host=request.host)
            return TenantContext.empty()

        tenant = await self._lookup(key)

        if tenant is None:
            logger.info("tenant_not_found", tenant_key=key, host=request.host)
            raise TenantNotFoundError(key)

        if tenant.is_inactive:
            logger.info("tenant_inactive", tenant_key=key, tenant_id=str(tenant.tenant_id))
            raise TenantInactiveError(tenant.tenant_id, tenant_key=key)

        logger.debug(
            "tenant_resolved",
            tenant_key=key,
            tenant_id=str(tenant.tenant_id),
            subscription_status=tenant.subscription_status.value,
        )
        return TenantContext.for_tenant(tenant)

    async def run(
        self,
        request: TenantRequest,
        continuation: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Resolve the tenant, then run ``continuation`` inside its context.

        If resolution raises (or the caller is cancelled during the lookup)
        the continuation never runs and no context is published.
        """
        ctx = await self.resolve(request)
        return await run_in_tenant_context(ctx, continuation, *args, **kwargs)

    async def _lookup(self, key: str) -> TenantSnapshot | None:
        """Query the directory, retrying transient failures."""
        max_attempts = max(1, self._settings.TENANT_LOOKUP_MAX_ATTEMPTS)
        last_error: TenantDirectoryUnavailableError | None = None

        for attempt in range(max_attempts):
            try:
                return await self._directory.find_by_subdomain(key)
            except TenantDirectoryUnavailableError as e:
                last_error = e
                if attempt < max_attempts - 1:
                    logger.warning(
                        "tenant_directory_retry",
                        tenant_key=key,
                        attempt=attempt + 1,
                        max_attempts=max_attempts,
                    )
                    await self._backoff(attempt)

        logger.error("tenant_directory_unavailable", tenant_key=key, attempts=max_attempts)
        raise TenantDirectoryUnavailableError(
            key,
            attempts=max_attempts,
            reason=last_error.reason if last_error else None,
        ) from last_error

    async def _backoff(self, attempt: int) -> None:
        """Wait with exponential backoff and jitter."""
        delay = min(
            self._settings.TENANT_LOOKUP_BASE_DELAY * (2**attempt),
            self._settings.TENANT_LOOKUP_MAX_DELAY,
        )
        jitter = delay * self._settings.TENANT_LOOKUP_JITTER * (random.random() * 2 - 1)
        await asyncio.sleep(max(0, delay + jitter))
