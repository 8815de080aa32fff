"""Pytest fixtures for Landscape360 tests."""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime
from uuid import UUID

import pytest
import pytest_asyncio
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from landscape360.config.settings import Settings
from landscape360.core.tokens import create_access_token
from landscape360.db.config import close_db, configure_engine
from landscape360.db.models import Base, BillingCycle, SubscriptionStatus, Tenant
from landscape360.db.schemas.tenant import TenantSnapshot
from landscape360.tenancy.access import Principal, UserRole

# Stable ids so tests can refer to seeded tenants
ACME_ID = UUID("11111111-1111-4111-8111-111111111111")
BETA_ID = UUID("22222222-2222-4222-8222-222222222222")
DORMANT_ID = UUID("33333333-3333-4333-8333-333333333333")
GREENLEAF_ID = UUID("44444444-4444-4444-8444-444444444444")
RAMIREZ_ID = UUID("55555555-5555-4555-8555-555555555555")


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create settings for testing.

    Retries are kept but without delays so outage tests stay fast.
    """
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        ENVIRONMENT="test",
        DEBUG=True,
        log_level="DEBUG",
        JWT_SECRET=SecretStr("test-jwt-secret"),
        TENANT_LOOKUP_MAX_ATTEMPTS=3,
        TENANT_LOOKUP_BASE_DELAY=0.0,
        TENANT_LOOKUP_MAX_DELAY=0.0,
        TENANT_LOOKUP_JITTER=0.0,
    )


# =============================================================================
# Tenant Fixtures
# =============================================================================


def make_snapshot(
    subdomain: str = "acme",
    tenant_id: UUID = ACME_ID,
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    **overrides,
) -> TenantSnapshot:
    """Build a detached tenant record without touching the database."""
    values = {
        "tenant_id": tenant_id,
        "name": f"{subdomain.title()} Landscaping",
        "email": f"owner@{subdomain}.example.com",
        "subdomain": subdomain,
        "subscription_status": status,
        "created_at": datetime(2025, 1, 1, tzinfo=UTC),
    }
    values.update(overrides)
    return TenantSnapshot(**values)


@pytest.fixture
def snapshot_factory() -> Callable[..., TenantSnapshot]:
    return make_snapshot


@pytest.fixture
def tenant_ids() -> dict[str, UUID]:
    """Ids of the tenants seeded by ``test_engine``."""
    return {
        "acme": ACME_ID,
        "beta": BETA_ID,
        "dormant": DORMANT_ID,
        "greenleaf": GREENLEAF_ID,
        "ramirez": RAMIREZ_ID,
    }


@pytest.fixture
def acme_snapshot() -> TenantSnapshot:
    return make_snapshot("acme", ACME_ID)


@pytest.fixture
def beta_snapshot() -> TenantSnapshot:
    return make_snapshot("beta", BETA_ID)


def _seed_tenants() -> list[Tenant]:
    return [
        Tenant(
            tenant_id=ACME_ID,
            name="Acme Landscaping",
            email="owner@acme.example.com",
            subdomain="acme",
            address="12 Elm Street",
            phone="555-0100",
            subscription_plan="pro",
            subscription_status=SubscriptionStatus.ACTIVE,
            billing_cycle=BillingCycle.YEARLY,
            settings={"theme_color": "#2f855a"},
        ),
        Tenant(
            tenant_id=BETA_ID,
            name="Beta Gardens",
            email="owner@beta.example.com",
            subdomain="beta",
            subscription_status=SubscriptionStatus.ACTIVE,
        ),
        Tenant(
            tenant_id=DORMANT_ID,
            name="Dormant Lawns",
            email="owner@dormant.example.com",
            subdomain="dormant",
            subscription_status=SubscriptionStatus.INACTIVE,
        ),
        Tenant(
            tenant_id=GREENLEAF_ID,
            name="Greenleaf",
            email="hello@greenleaf.com",
            subdomain="greenleaf.com",
            domain="greenleaf.com",
            custom_domains=["greenleaf.com"],
            subscription_status=SubscriptionStatus.ACTIVE,
        ),
        Tenant(
            tenant_id=RAMIREZ_ID,
            name="Ramirez Gardening",
            email="info@ramirez-gardening.example.com",
            subdomain="ramirez-gardening",
            subscription_status=SubscriptionStatus.TRIALING,
        ),
    ]


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the schema created and tenants seeded.

    The engine is installed as the process-wide engine so that code using
    ``get_async_session()`` talks to it.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        session.add_all(_seed_tenants())
        await session.commit()

    configure_engine(engine=engine)

    yield engine

    await close_db()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def test_app(test_settings: Settings, test_engine: AsyncEngine) -> FastAPI:
    """Create a FastAPI test application backed by the seeded database."""
    from landscape360.api.app import create_app

    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def test_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for API testing.

    The base URL is a platform host; tests pick a tenant through the
    ``Host`` or ``X-Tenant-*`` headers.
    """
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://localhost",
    ) as client:
        yield client


@pytest.fixture
def make_token(test_settings: Settings) -> Callable[..., str]:
    """Factory for signed bearer tokens."""

    def _make(
        role: UserRole = UserRole.TENANT_ADMIN,
        tenant_id: UUID | None = ACME_ID,
        user_id: str = "user-1",
    ) -> str:
        principal = Principal(user_id=user_id, role=role, tenant_id=tenant_id)
        return create_access_token(principal, test_settings)

    return _make
