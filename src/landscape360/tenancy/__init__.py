"""Tenant resolution, lookup and access control."""

from .access import Principal, UserRole, check_tenant_access, validate_tenant_access
from .directory import SQLAlchemyTenantDirectory, TenantDirectory
from .domains import (
    build_tenant_frontend_url,
    extract_tenant_key,
    is_local_dev_host,
    is_platform_host,
    strip_port,
)
from .resolver import (
    TENANT_DOMAIN_HEADER,
    TENANT_SUBDOMAIN_HEADER,
    TenantRequest,
    TenantResolver,
)
from .scoping import scoped_to_current_tenant, tenant_scoped

__all__ = [
    # Access
    "Principal",
    "UserRole",
    "check_tenant_access",
    "validate_tenant_access",
    # Directory
    "SQLAlchemyTenantDirectory",
    "TenantDirectory",
    # Domains
    "build_tenant_frontend_url",
    "extract_tenant_key",
    "is_local_dev_host",
    "is_platform_host",
    "strip_port",
    # Resolver
    "TENANT_DOMAIN_HEADER",
    "TENANT_SUBDOMAIN_HEADER",
    "TenantRequest",
    "TenantResolver",
    # Scoping
    "scoped_to_current_tenant",
    "tenant_scoped",
]
