"""Configuration validation for startup checks.

Validates that required configuration is present and valid before the
application starts accepting requests.

Usage:
    from landscape360.config.validation import validate_or_raise

    # During startup
    validate_or_raise(settings)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from landscape360.config.settings import Settings, get_settings
from landscape360.utils.exceptions import ConfigurationError


logger = logging.getLogger("landscape360.config")


class ValidationSeverity(str, Enum):
    """Severity of configuration validation issues."""

    ERROR = "error"  # Must be fixed, app cannot start
    WARNING = "warning"  # Should be fixed, app can start but may have issues


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""

    field: str
    severity: ValidationSeverity
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        prefix = "ERROR" if self.severity == ValidationSeverity.ERROR else "WARNING"
        result = f"[{prefix}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


def validate_configuration(settings: Settings | None = None) -> list[ValidationResult]:
    """Validate application configuration.

    Args:
        settings: Settings to validate (default: global settings)

    Returns:
        List of validation results (empty if all checks pass)
    """
    if settings is None:
        settings = get_settings()

    results: list[ValidationResult] = []

    results.extend(_validate_database(settings))
    results.extend(_validate_security(settings))
    results.extend(_validate_tenancy(settings))
    results.extend(_validate_environment(settings))

    return results


def validate_or_raise(settings: Settings | None = None) -> None:
    """Validate configuration and raise if errors found.

    Args:
        settings: Settings to validate

    Raises:
        ConfigurationError: If any validation errors are found
    """
    results = validate_configuration(settings)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]

    if errors:
        error_messages = "\n".join(str(e) for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_messages}")

    warnings = [r for r in results if r.severity == ValidationSeverity.WARNING]
    for warning in warnings:
        logger.warning(str(warning))


# =============================================================================
# Validators
# =============================================================================


def _validate_database(settings: Settings) -> list[ValidationResult]:
    """Validate database configuration."""
    results: list[ValidationResult] = []

    if not settings.DATABASE_URL:
        results.append(
            ValidationResult(
                field="DATABASE_URL",
                severity=ValidationSeverity.ERROR,
                message="Database URL is not configured",
                suggestion="Set DATABASE_URL environment variable",
            )
        )
    elif not settings.DATABASE_URL.startswith(("postgresql", "sqlite")):
        results.append(
            ValidationResult(
                field="DATABASE_URL",
                severity=ValidationSeverity.WARNING,
                message=f"Unexpected database type in URL: {settings.DATABASE_URL[:20]}...",
                suggestion="Landscape360 is designed for PostgreSQL or SQLite",
            )
        )

    return results


def _validate_security(settings: Settings) -> list[ValidationResult]:
    """Validate security configuration."""
    results: list[ValidationResult] = []

    if settings.JWT_SECRET is None:
        results.append(
            ValidationResult(
                field="JWT_SECRET",
                severity=(
                    ValidationSeverity.ERROR
                    if settings.is_production
                    else ValidationSeverity.WARNING
                ),
                message="JWT secret is not configured - bearer tokens will be rejected",
                suggestion="Set JWT_SECRET to a long random string",
            )
        )
    elif len(settings.JWT_SECRET.get_secret_value()) < 32:
        results.append(
            ValidationResult(
                field="JWT_SECRET",
                severity=ValidationSeverity.WARNING,
                message="JWT secret is short and may be weak",
                suggestion="Use at least 32 characters",
            )
        )

    if settings.is_production and "*" in settings.CORS_ORIGINS:
        results.append(
            ValidationResult(
                field="CORS_ORIGINS",
                severity=ValidationSeverity.ERROR,
                message="Wildcard CORS origin not allowed in production",
                suggestion="Specify exact allowed origins",
            )
        )

    return results


def _validate_tenancy(settings: Settings) -> list[ValidationResult]:
    """Validate tenant resolution configuration."""
    results: list[ValidationResult] = []

    for prefix in settings.ADMIN_PATH_PREFIXES:
        if not prefix.startswith("/"):
            results.append(
                ValidationResult(
                    field="ADMIN_PATH_PREFIXES",
                    severity=ValidationSeverity.ERROR,
                    message=f"Admin path prefix must start with '/': {prefix!r}",
                )
            )

    if settings.BASE_DOMAIN.lower() not in settings.reserved_hosts:
        results.append(
            ValidationResult(
                field="PLATFORM_HOSTS",
                severity=ValidationSeverity.WARNING,
                message=f"BASE_DOMAIN {settings.BASE_DOMAIN!r} is not a platform host",
                suggestion="Requests to the base domain will be resolved as a tenant key",
            )
        )

    if settings.TENANT_LOOKUP_MAX_ATTEMPTS < 1:
        results.append(
            ValidationResult(
                field="TENANT_LOOKUP_MAX_ATTEMPTS",
                severity=ValidationSeverity.ERROR,
                message="At least one tenant lookup attempt is required",
            )
        )

    if settings.TENANT_LOOKUP_BASE_DELAY > settings.TENANT_LOOKUP_MAX_DELAY:
        results.append(
            ValidationResult(
                field="TENANT_LOOKUP_BASE_DELAY",
                severity=ValidationSeverity.WARNING,
                message="Base retry delay exceeds the maximum retry delay",
            )
        )

    return results


def _validate_environment(settings: Settings) -> list[ValidationResult]:
    """Validate environment-specific settings."""
    results: list[ValidationResult] = []

    if settings.is_production and settings.DEBUG:
        results.append(
            ValidationResult(
                field="DEBUG",
                severity=ValidationSeverity.ERROR,
                message="Debug mode must be disabled in production",
                suggestion="Set DEBUG=false for production",
            )
        )

    if settings.is_production and settings.log_level == "DEBUG":
        results.append(
            ValidationResult(
                field="log_level",
                severity=ValidationSeverity.WARNING,
                message="DEBUG log level in production may expose sensitive data",
                suggestion="Use INFO or WARNING for production",
            )
        )

    return results


def get_configuration_summary(settings: Settings | None = None) -> dict[str, Any]:
    """Get a summary of current configuration (safe for logging).

    Args:
        settings: Settings to summarize

    Returns:
        Dictionary with configuration summary
    """
    if settings is None:
        settings = get_settings()

    return {
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "log_level": settings.log_level,
        "api_prefix": settings.API_PREFIX,
        "base_domain": settings.BASE_DOMAIN,
        "platform_hosts": sorted(settings.reserved_hosts),
        "admin_path_prefixes": list(settings.ADMIN_PATH_PREFIXES),
        "jwt_configured": settings.JWT_SECRET is not None,
        "tenant_lookup_max_attempts": settings.TENANT_LOOKUP_MAX_ATTEMPTS,
    }
