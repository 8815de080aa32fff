"""Unit tests for explicit tenant query filters."""

import pytest
from sqlalchemy import select

from landscape360.core.context import TenantContext, tenant_context
from landscape360.core.exceptions import ContextNotSetError, TenantRequiredError
from landscape360.db.models.tenant import Tenant
from landscape360.tenancy.scoping import scoped_to_current_tenant, tenant_scoped


class TestTenantScoped:
    """Tests for tenant_scoped."""

    def test_adds_tenant_filter(self, tenant_ids):
        statement = tenant_scoped(select(Tenant), Tenant, tenant_ids["acme"])

        sql = str(statement)
        assert "WHERE tenants.tenant_id = :tenant_id_1" in sql

    def test_missing_tenant_id_raises(self):
        with pytest.raises(TenantRequiredError):
            tenant_scoped(select(Tenant), Tenant, None)

    @pytest.mark.asyncio
    async def test_filters_rows(self, db_session, tenant_ids):
        statement = tenant_scoped(select(Tenant), Tenant, tenant_ids["beta"])

        rows = (await db_session.execute(statement)).scalars().all()

        assert [row.subdomain for row in rows] == ["beta"]


class TestScopedToCurrentTenant:
    """Tests for scoped_to_current_tenant."""

    @pytest.mark.asyncio
    async def test_uses_context_tenant(self, db_session, acme_snapshot):
        with tenant_context(TenantContext.for_tenant(acme_snapshot)):
            statement = scoped_to_current_tenant(select(Tenant), Tenant)

        rows = (await db_session.execute(statement)).scalars().all()

        assert [row.tenant_id for row in rows] == [acme_snapshot.tenant_id]

    def test_platform_context_raises(self):
        with tenant_context(TenantContext.empty()):
            with pytest.raises(TenantRequiredError):
                scoped_to_current_tenant(select(Tenant), Tenant)

    def test_no_context_raises(self):
        with pytest.raises(ContextNotSetError):
            scoped_to_current_tenant(select(Tenant), Tenant)
