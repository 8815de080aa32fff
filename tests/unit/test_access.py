"""Unit tests for tenant access validation."""

from uuid import uuid4

import pytest

from landscape360.core.context import TenantContext, tenant_context
from landscape360.core.exceptions import TenantAccessDeniedError
from landscape360.tenancy.access import (
    Principal,
    UserRole,
    check_tenant_access,
    validate_tenant_access,
)


@pytest.fixture
def acme_context(acme_snapshot) -> TenantContext:
    return TenantContext.for_tenant(acme_snapshot)


class TestPrincipal:
    """Tests for the Principal model."""

    def test_super_admin_flag(self):
        assert Principal(user_id="u1", role=UserRole.SUPER_ADMIN).is_super_admin is True
        assert Principal(user_id="u1", role=UserRole.STAFF).is_super_admin is False

    def test_role_from_string(self):
        assert Principal(user_id="u1", role="tenantAdmin").role == UserRole.TENANT_ADMIN


class TestValidateTenantAccess:
    """Tests for validate_tenant_access."""

    def test_member_of_tenant_passes(self, acme_context):
        principal = Principal(
            user_id="u1", role=UserRole.TENANT_ADMIN, tenant_id=acme_context.tenant_id
        )
        validate_tenant_access(principal, acme_context)

    def test_member_of_other_tenant_denied(self, acme_context):
        other_tenant = uuid4()
        principal = Principal(user_id="u1", role=UserRole.CUSTOMER, tenant_id=other_tenant)

        with pytest.raises(TenantAccessDeniedError) as exc_info:
            validate_tenant_access(principal, acme_context)

        assert exc_info.value.tenant_id == acme_context.tenant_id
        assert exc_info.value.principal_tenant_id == other_tenant

    def test_principal_without_tenant_denied(self, acme_context):
        principal = Principal(user_id="u1", role=UserRole.STAFF)

        with pytest.raises(TenantAccessDeniedError):
            validate_tenant_access(principal, acme_context)

    @pytest.mark.parametrize("tenant_id", [None, uuid4()])
    def test_super_admin_passes_any_tenant(self, acme_context, tenant_id):
        principal = Principal(user_id="root", role=UserRole.SUPER_ADMIN, tenant_id=tenant_id)
        validate_tenant_access(principal, acme_context)

    def test_anonymous_passes(self, acme_context):
        validate_tenant_access(None, acme_context)

    def test_platform_context_passes(self):
        principal = Principal(user_id="u1", role=UserRole.CUSTOMER, tenant_id=uuid4())
        validate_tenant_access(principal, TenantContext.empty())

    def test_uses_current_context_by_default(self, acme_context):
        principal = Principal(user_id="u1", role=UserRole.CUSTOMER, tenant_id=uuid4())

        with tenant_context(acme_context):
            with pytest.raises(TenantAccessDeniedError):
                validate_tenant_access(principal)

    def test_no_context_passes(self):
        principal = Principal(user_id="u1", role=UserRole.CUSTOMER, tenant_id=uuid4())
        validate_tenant_access(principal)


class TestCheckTenantAccess:
    """Tests for check_tenant_access."""

    def test_returns_bool(self, acme_context):
        member = Principal(
            user_id="u1", role=UserRole.STAFF, tenant_id=acme_context.tenant_id
        )
        outsider = Principal(user_id="u2", role=UserRole.STAFF, tenant_id=uuid4())

        assert check_tenant_access(member, acme_context) is True
        assert check_tenant_access(outsider, acme_context) is False
