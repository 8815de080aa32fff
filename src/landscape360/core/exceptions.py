"""Core exceptions for tenant resolution, tenant context and authentication."""

from uuid import UUID

from landscape360.utils.exceptions import Landscape360Error


class ContextNotSetError(Landscape360Error):
    """Raised when attempting to access tenant context that is not set.

    This error indicates a programming error - code that reads the tenant
    context is running outside of a tenant_context() block.
    """

    def __init__(self, message: str = "Tenant context is not set"):
        super().__init__(message)


class TenantNotFoundError(Landscape360Error):
    """Raised when a tenant key does not match any tenant in the directory.

    Attributes:
        tenant_key: The subdomain/domain key that could not be resolved
    """

    def __init__(self, tenant_key: UUID | str):
        super().__init__(f"Tenant not found: {tenant_key}")
        self.tenant_key = tenant_key

    def __str__(self) -> str:
        return f"TenantNotFoundError: {self.args[0]}"


class TenantInactiveError(Landscape360Error):
    """Raised when the resolved tenant's subscription does not allow access.

    Attributes:
        tenant_id: The identifier of the inactive tenant
        tenant_key: The key the tenant was resolved from, if any
    """

    def __init__(self, tenant_id: UUID | str, tenant_key: str | None = None):
        super().__init__(f"Tenant account is inactive: {tenant_id}")
        self.tenant_id = tenant_id
        self.tenant_key = tenant_key

    def __str__(self) -> str:
        return f"TenantInactiveError: {self.args[0]}"


class TenantAccessDeniedError(Landscape360Error):
    """Raised when a principal does not belong to the request's tenant.

    Attributes:
        tenant_id: The tenant resolved for the request
        principal_tenant_id: The tenant the principal belongs to
    """

    def __init__(self, tenant_id: UUID | str, principal_tenant_id: UUID | str | None):
        super().__init__("Access denied: user does not belong to this tenant")
        self.tenant_id = tenant_id
        self.principal_tenant_id = principal_tenant_id

    def __str__(self) -> str:
        return f"TenantAccessDeniedError: {self.args[0]}"


class TenantRequiredError(Landscape360Error):
    """Raised when a tenant-scoped operation runs without a resolved tenant."""

    def __init__(self, message: str = "This operation requires a tenant context"):
        super().__init__(message)

    def __str__(self) -> str:
        return f"TenantRequiredError: {self.args[0]}"


class TenantDirectoryUnavailableError(Landscape360Error):
    """Raised when the tenant directory cannot be reached.

    Unlike TenantNotFoundError this is a transient infrastructure failure
    and may be retried.

    Attributes:
        tenant_key: The key that was being looked up
        attempts: Number of lookup attempts made before giving up
    """

    def __init__(self, tenant_key: str, attempts: int = 1, reason: str | None = None):
        message = f"Tenant directory unavailable while resolving {tenant_key!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.tenant_key = tenant_key
        self.attempts = attempts
        self.reason = reason

    def __str__(self) -> str:
        return f"TenantDirectoryUnavailableError: {self.args[0]} (attempts={self.attempts})"


class AuthenticationError(Landscape360Error):
    """Raised when authentication fails.

    Attributes:
        reason: The specific reason authentication failed
    """

    def __init__(self, reason: str = "Authentication failed"):
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"AuthenticationError: {self.args[0]}"


class AuthorizationError(Landscape360Error):
    """Raised when an authenticated user lacks the role an operation needs.

    Attributes:
        role: The user's role
        required: The role the operation requires
    """

    def __init__(self, role: str, required: str):
        super().__init__(f"Role '{role}' is not allowed; requires '{required}'")
        self.role = role
        self.required = required
