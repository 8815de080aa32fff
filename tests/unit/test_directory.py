"""Unit tests for the SQLAlchemy-backed tenant directory."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, ProgrammingError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from landscape360.core.exceptions import TenantDirectoryUnavailableError
from landscape360.db.config import get_async_session
from landscape360.db.models.tenant import SubscriptionStatus
from landscape360.db.schemas.tenant import TenantSnapshot
from landscape360.tenancy.directory import (
    SQLAlchemyTenantDirectory,
    TenantDirectory,
    is_transient_error,
)


def failing_session_factory(error: Exception):
    """Session factory whose sessions fail on every query."""

    @asynccontextmanager
    async def factory():
        session = MagicMock(spec=AsyncSession)
        session.execute = AsyncMock(side_effect=error)
        yield session

    return factory


class TestSQLAlchemyTenantDirectory:
    """Tests for SQLAlchemyTenantDirectory."""

    def test_satisfies_protocol(self):
        assert isinstance(SQLAlchemyTenantDirectory(get_async_session), TenantDirectory)

    @pytest.mark.asyncio
    async def test_finds_tenant_by_subdomain(self, test_engine, tenant_ids):
        directory = SQLAlchemyTenantDirectory(get_async_session)

        tenant = await directory.find_by_subdomain("acme")

        assert isinstance(tenant, TenantSnapshot)
        assert tenant.tenant_id == tenant_ids["acme"]
        assert tenant.name == "Acme Landscaping"
        assert tenant.subscription_status == SubscriptionStatus.ACTIVE
        assert tenant.settings == {"theme_color": "#2f855a"}

    @pytest.mark.asyncio
    async def test_lookup_is_case_insensitive(self, test_engine, tenant_ids):
        directory = SQLAlchemyTenantDirectory(get_async_session)

        tenant = await directory.find_by_subdomain("ACME")

        assert tenant is not None
        assert tenant.tenant_id == tenant_ids["acme"]

    @pytest.mark.asyncio
    async def test_apex_domain_key(self, test_engine, tenant_ids):
        directory = SQLAlchemyTenantDirectory(get_async_session)

        tenant = await directory.find_by_subdomain("greenleaf.com")

        assert tenant.tenant_id == tenant_ids["greenleaf"]
        assert tenant.custom_domains == ("greenleaf.com",)

    @pytest.mark.asyncio
    async def test_unknown_tenant_returns_none(self, test_engine):
        directory = SQLAlchemyTenantDirectory(get_async_session)
        assert await directory.find_by_subdomain("ghost") is None

    @pytest.mark.asyncio
    async def test_inactive_tenant_is_returned(self, test_engine):
        """Rejecting inactive tenants is the resolver's job, not the directory's."""
        directory = SQLAlchemyTenantDirectory(get_async_session)

        tenant = await directory.find_by_subdomain("dormant")

        assert tenant.is_inactive is True

    @pytest.mark.asyncio
    async def test_accepts_sessionmaker(self, test_engine, tenant_ids):
        factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
        directory = SQLAlchemyTenantDirectory(factory)

        tenant = await directory.find_by_subdomain("beta")

        assert tenant.tenant_id == tenant_ids["beta"]

    @pytest.mark.asyncio
    async def test_snapshot_is_detached_and_frozen(self, test_engine):
        directory = SQLAlchemyTenantDirectory(get_async_session)

        tenant = await directory.find_by_subdomain("acme")

        # Session is closed; attributes are plain values
        assert tenant.subdomain == "acme"
        with pytest.raises(ValidationError):
            tenant.subdomain = "other"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            OperationalError("SELECT 1", {}, Exception("connection refused")),
            PoolTimeoutError("QueuePool limit reached"),
            ConnectionRefusedError("connection refused"),
        ],
    )
    async def test_connection_failures_become_unavailable(self, error):
        directory = SQLAlchemyTenantDirectory(failing_session_factory(error))

        with pytest.raises(TenantDirectoryUnavailableError) as exc_info:
            await directory.find_by_subdomain("acme")

        assert exc_info.value.tenant_key == "acme"
        assert exc_info.value.reason == type(error).__name__
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_programming_errors_propagate(self):
        directory = SQLAlchemyTenantDirectory(failing_session_factory(ValueError("bad")))

        with pytest.raises(ValueError):
            await directory.find_by_subdomain("acme")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ProgrammingError(
                "SELECT", {}, Exception("column tenants.subdomain does not exist")
            ),
            IntegrityError("SELECT", {}, Exception("constraint violated")),
        ],
    )
    async def test_driver_bugs_are_not_outages(self, error):
        directory = SQLAlchemyTenantDirectory(failing_session_factory(error))

        with pytest.raises(type(error)):
            await directory.find_by_subdomain("acme")

    @pytest.mark.asyncio
    async def test_invalidated_connection_is_an_outage(self):
        error = DBAPIError(
            "SELECT", {}, Exception("server closed the connection"), connection_invalidated=True
        )
        directory = SQLAlchemyTenantDirectory(failing_session_factory(error))

        with pytest.raises(TenantDirectoryUnavailableError) as exc_info:
            await directory.find_by_subdomain("acme")

        assert exc_info.value.reason == "DBAPIError"


class TestIsTransientError:
    """Tests for is_transient_error."""

    def test_operational_error(self):
        assert is_transient_error(OperationalError("SELECT 1", {}, Exception("down")))

    def test_programming_error(self):
        assert not is_transient_error(ProgrammingError("SELECT", {}, Exception("bad column")))

    def test_os_error(self):
        assert is_transient_error(ConnectionResetError())
