"""Read-only tenant lookups used by the tenant resolver."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Protocol, runtime_checkable

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from landscape360.core.exceptions import TenantDirectoryUnavailableError
from landscape360.core.logging import get_logger
from landscape360.db.models.tenant import Tenant
from landscape360.db.schemas.tenant import TenantSnapshot

logger = get_logger("landscape360.tenancy.directory")

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

# Failures that mean "the directory could not answer", not "no such tenant".
# Other driver errors (bad SQL, schema drift) are bugs and propagate as-is.
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
    OSError,
)


def is_transient_error(exc: BaseException) -> bool:
    """Whether ``exc`` means the backing store could not be reached."""
    if isinstance(exc, TRANSIENT_ERRORS):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


@runtime_checkable
class TenantDirectory(Protocol):
    """Lookup table from tenant key to tenant record."""

    async def find_by_subdomain(self, subdomain: str) -> TenantSnapshot | None:
        """Return the tenant whose subdomain equals ``subdomain``, or None.

        Raises:
            TenantDirectoryUnavailableError: If the backing store cannot be reached
        """
        ...


class SQLAlchemyTenantDirectory:
    """Tenant directory backed by the ``tenants`` table.

    Each lookup opens a short-lived session so the directory can be shared
    by every request in the process.
    """

    def __init__(self, session_factory: SessionFactory):
        """Initialize the directory.

        Args:
            session_factory: Callable returning an async session context
                manager, e.g. ``get_async_session`` or an ``async_sessionmaker``
        """
        self._session_factory = session_factory

    async def find_by_subdomain(self, subdomain: str) -> TenantSnapshot | None:
        """Look up a tenant by subdomain (case-insensitive).

        Args:
            subdomain: Tenant key produced by the resolver

        Returns:
            Detached snapshot of the tenant, or None if no tenant matches

        Raises:
            TenantDirectoryUnavailableError: On connection failures; other
                driver errors propagate unchanged
        """
        query = select(Tenant).where(func.lower(Tenant.subdomain) == subdomain.lower())
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                tenant = result.scalar_one_or_none()
                if tenant is None:
                    return None
                return TenantSnapshot.model_validate(tenant)
        except (DBAPIError, PoolTimeoutError, OSError) as e:
            if not is_transient_error(e):
                raise
            logger.warning(
                "tenant_directory_error",
                tenant_key=subdomain,
                error_type=type(e).__name__,
            )
            raise TenantDirectoryUnavailableError(subdomain, reason=type(e).__name__) from e
