"""Unit tests for configuration validation."""

import pytest
from pydantic import SecretStr

from landscape360.config.settings import Settings
from landscape360.config.validation import (
    ValidationSeverity,
    get_configuration_summary,
    validate_configuration,
    validate_or_raise,
)
from landscape360.utils.exceptions import ConfigurationError

STRONG_SECRET = SecretStr("x" * 40)


def _fields(results, severity):
    return {r.field for r in results if r.severity == severity}


class TestSettings:
    """Tests for Settings defaults and normalization."""

    def test_reserved_hosts_include_local_and_platform(self):
        settings = Settings(PLATFORM_HOSTS=["Platform.Test "])
        assert settings.reserved_hosts == {"localhost", "127.0.0.1", "platform.test"}

    def test_defaults(self):
        settings = Settings()
        assert settings.API_PREFIX == "/api/v1"
        assert "delxn.club" in settings.PLATFORM_HOSTS
        assert settings.ADMIN_PATH_PREFIXES == ["/api/v1/admin", "/api/v1/super-admin"]


class TestValidateConfiguration:
    """Tests for validate_configuration."""

    def test_valid_development_settings(self):
        settings = Settings(ENVIRONMENT="development", JWT_SECRET=STRONG_SECRET)
        assert validate_configuration(settings) == []

    def test_missing_jwt_secret_warns_in_development(self):
        results = validate_configuration(Settings(ENVIRONMENT="development"))
        assert "JWT_SECRET" in _fields(results, ValidationSeverity.WARNING)

    def test_missing_jwt_secret_fails_in_production(self):
        results = validate_configuration(Settings(ENVIRONMENT="production"))
        assert "JWT_SECRET" in _fields(results, ValidationSeverity.ERROR)

    def test_short_jwt_secret_warns(self):
        results = validate_configuration(Settings(JWT_SECRET=SecretStr("short")))
        assert "JWT_SECRET" in _fields(results, ValidationSeverity.WARNING)

    def test_debug_in_production_is_error(self):
        settings = Settings(ENVIRONMENT="production", DEBUG=True, JWT_SECRET=STRONG_SECRET)
        assert "DEBUG" in _fields(validate_configuration(settings), ValidationSeverity.ERROR)

    def test_wildcard_cors_in_production_is_error(self):
        settings = Settings(
            ENVIRONMENT="production", JWT_SECRET=STRONG_SECRET, CORS_ORIGINS=["*"]
        )
        assert "CORS_ORIGINS" in _fields(
            validate_configuration(settings), ValidationSeverity.ERROR
        )

    def test_admin_prefix_must_be_absolute(self):
        settings = Settings(JWT_SECRET=STRONG_SECRET, ADMIN_PATH_PREFIXES=["api/v1/admin"])
        assert "ADMIN_PATH_PREFIXES" in _fields(
            validate_configuration(settings), ValidationSeverity.ERROR
        )

    def test_base_domain_not_reserved_warns(self):
        settings = Settings(JWT_SECRET=STRONG_SECRET, BASE_DOMAIN="example.org")
        assert "PLATFORM_HOSTS" in _fields(
            validate_configuration(settings), ValidationSeverity.WARNING
        )

    def test_zero_retries_is_error(self):
        settings = Settings(JWT_SECRET=STRONG_SECRET, TENANT_LOOKUP_MAX_ATTEMPTS=0)
        assert "TENANT_LOOKUP_MAX_ATTEMPTS" in _fields(
            validate_configuration(settings), ValidationSeverity.ERROR
        )

    def test_base_delay_above_max_warns(self):
        settings = Settings(
            JWT_SECRET=STRONG_SECRET,
            TENANT_LOOKUP_BASE_DELAY=5.0,
            TENANT_LOOKUP_MAX_DELAY=1.0,
        )
        assert "TENANT_LOOKUP_BASE_DELAY" in _fields(
            validate_configuration(settings), ValidationSeverity.WARNING
        )

    def test_unexpected_database_warns(self):
        settings = Settings(JWT_SECRET=STRONG_SECRET, DATABASE_URL="mysql://db/app")
        assert "DATABASE_URL" in _fields(
            validate_configuration(settings), ValidationSeverity.WARNING
        )


class TestValidateOrRaise:
    """Tests for validate_or_raise."""

    def test_raises_on_errors(self):
        with pytest.raises(ConfigurationError, match="JWT_SECRET"):
            validate_or_raise(Settings(ENVIRONMENT="production"))

    def test_warnings_do_not_raise(self, test_settings):
        validate_or_raise(test_settings)


class TestConfigurationSummary:
    """Tests for get_configuration_summary."""

    def test_summary_hides_secret(self, test_settings):
        summary = get_configuration_summary(test_settings)

        assert summary["jwt_configured"] is True
        assert "test-jwt-secret" not in str(summary)
        assert "localhost" in summary["platform_hosts"]
