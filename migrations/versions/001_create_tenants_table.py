"""Create tenants table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    subscription_status = postgresql.ENUM(
        "active", "inactive", "trialing", "suspended", name="subscription_status"
    )
    billing_cycle = postgresql.ENUM("monthly", "yearly", name="billing_cycle")

    op.create_table(
        "tenants",
        sa.Column("tenant_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        # Routing
        sa.Column("subdomain", sa.String(255), nullable=False, unique=True),
        sa.Column("domain", sa.String(255), nullable=True),
        sa.Column(
            "custom_domains",
            postgresql.JSONB,
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        # Contact
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        # Subscription
        sa.Column("subscription_plan", sa.String(100), nullable=False, server_default="none"),
        sa.Column(
            "subscription_status",
            subscription_status,
            nullable=False,
            server_default="trialing",
        ),
        sa.Column("billing_cycle", billing_cycle, nullable=False, server_default="monthly"),
        sa.Column(
            "settings",
            postgresql.JSONB,
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    # Lookups are case-insensitive on the subdomain key
    op.create_index(
        "idx_tenant_subdomain_lower",
        "tenants",
        [sa.text("lower(subdomain)")],
        unique=True,
    )
    op.create_index("idx_tenant_status", "tenants", ["subscription_status"])


def downgrade() -> None:
    op.drop_index("idx_tenant_status", table_name="tenants")
    op.drop_index("idx_tenant_subdomain_lower", table_name="tenants")
    op.drop_table("tenants")

    postgresql.ENUM(name="billing_cycle").drop(op.get_bind(), checkfirst=True)
    postgresql.ENUM(name="subscription_status").drop(op.get_bind(), checkfirst=True)
