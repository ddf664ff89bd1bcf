"""Initial schema and default data for UXperiment

Revision ID: 20250330_000000
Revises: None
Create Date: 2025-03-30 00:00:00.000000

This is the initial migration that creates all marketplace tables and seeds
the default data the application expects:
- Accounts, plans, subscriptions and payments
- Components, favorites and the component view log
- Daily statistics buckets
- Site settings
- The default plans (Free, Basic, Pro, Enterprise) and site settings

Revision format: YYYYMMDD_HHMMSS_description

"""

import json
from datetime import datetime
from decimal import Decimal
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20250330_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEED_TIMESTAMP = datetime(2025, 3, 30)

DEFAULT_PLANS = [
    {
        "name": "Free",
        "description": "Basic access to components",
        "price": Decimal("0.00"),
        "duration_days": 0,
        "features": ["Access to 5 basic components", "Limited downloads", "Community support"],
        "discount": None,
    },
    {
        "name": "Basic",
        "description": "Essential components for developers",
        "price": Decimal("9.99"),
        "duration_days": 30,
        "features": [
            "Access to 20 components",
            "Download CSS and HTML code",
            "Email support",
            "Usage in personal projects",
        ],
        "discount": None,
    },
    {
        "name": "Pro",
        "description": "Professional package for serious developers",
        "price": Decimal("19.99"),
        "duration_days": 30,
        "features": [
            "Access to all components",
            "Download all code formats",
            "Priority email support",
            "Usage in commercial projects",
            "Premium components",
        ],
        "discount": 10,
    },
    {
        "name": "Enterprise",
        "description": "Complete solution for companies",
        "price": Decimal("49.99"),
        "duration_days": 30,
        "features": [
            "Access to all components",
            "Custom component development",
            "24/7 priority support",
            "Team collaboration",
            "Commercial use with extended license",
            "API access",
        ],
        "discount": 15,
    },
]

DEFAULT_SETTINGS = [
    ("general", "siteName", "UXperiment Labs"),
    ("general", "siteDescription", "Plataforma de desenvolvimento e experimentação de componentes UI"),
    ("general", "contactEmail", "contato@uxperiment.com"),
    ("appearance", "primaryColor", "#6366F1"),
    ("appearance", "darkMode", "true"),
    ("appearance", "theme", "system"),
]


def upgrade() -> None:
    """Create all tables and seed default data."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("picture", sa.String(1024), nullable=True),
        sa.Column("google_id", sa.String(64), nullable=True),
        sa.Column("role", sa.String(16), nullable=False, server_default="user"),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("google_id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_last_login", "users", ["last_login"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # Create plans table
    plans = op.create_table(
        "plans",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("duration_days", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("features", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("discount", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_plans_is_active", "plans", ["is_active"])

    # Create subscriptions table
    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("plan_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="ACTIVE"),
        sa.Column("payment_method", sa.String(64), nullable=True),
        sa.Column("transaction_id", sa.String(128), nullable=True),
        sa.Column("cancel_date", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["plan_id"], ["plans.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_subscriptions_user_id", "subscriptions", ["user_id"])
    op.create_index("ix_subscriptions_plan_id", "subscriptions", ["plan_id"])
    op.create_index("ix_subscriptions_status", "subscriptions", ["status"])

    # Create payments table
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("subscription_id", sa.Integer(), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="COMPLETED"),
        sa.Column("payment_method", sa.String(64), nullable=True),
        sa.Column("transaction_id", sa.String(128), nullable=True),
        sa.Column("payment_date", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["subscription_id"], ["subscriptions.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_payments_user_id", "payments", ["user_id"])
    op.create_index("ix_payments_subscription_id", "payments", ["subscription_id"])
    op.create_index("ix_payments_status", "payments", ["status"])
    op.create_index("ix_payments_payment_date", "payments", ["payment_date"])

    # Create components table
    op.create_table(
        "components",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(64), nullable=False, server_default="Outros"),
        sa.Column("color", sa.String(7), nullable=False, server_default="#6366F1"),
        sa.Column("css_content", sa.Text(), nullable=False),
        sa.Column("html_content", sa.Text(), nullable=True),
        sa.Column("requires_subscription", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_components_name", "components", ["name"])
    op.create_index("ix_components_category", "components", ["category"])
    op.create_index("ix_components_requires_subscription", "components", ["requires_subscription"])
    op.create_index("ix_components_user_id", "components", ["user_id"])

    # Create favorites table
    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("component_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["component_id"], ["components.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "component_id", name="uq_favorites_user_component"),
    )
    op.create_index("ix_favorites_user_id", "favorites", ["user_id"])
    op.create_index("ix_favorites_component_id", "favorites", ["component_id"])
    op.create_index("ix_favorites_created_at", "favorites", ["created_at"])

    # Create component_views table (user_id has no foreign key)
    op.create_table(
        "component_views",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("component_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("session_id", sa.String(128), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["component_id"], ["components.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_component_views_component_id", "component_views", ["component_id"])
    op.create_index("ix_component_views_user_id", "component_views", ["user_id"])
    op.create_index("ix_component_views_timestamp", "component_views", ["timestamp"])

    # Create statistics table
    op.create_table(
        "statistics",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("component_views", sa.JSON(), nullable=False),
        sa.Column("new_users", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active_users", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_subscriptions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("revenue", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("most_viewed_components", sa.JSON(), nullable=False),
        sa.Column("most_favorited_components", sa.JSON(), nullable=False),
        sa.Column("conversion_rate", sa.Numeric(7, 2), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_statistics_date", "statistics", ["date"], unique=True)

    # Create settings table
    settings = op.create_table(
        "settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("section", sa.String(64), nullable=False),
        sa.Column("key", sa.String(128), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("section", "key", name="uq_settings_section_key"),
    )
    op.create_index("ix_settings_section", "settings", ["section"])

    # =====================================================================
    # SEED DATA
    # =====================================================================

    op.bulk_insert(
        plans,
        [
            {
                "name": plan["name"],
                "description": plan["description"],
                "price": plan["price"],
                "duration_days": plan["duration_days"],
                "features": json.dumps(plan["features"]),
                "is_active": True,
                "discount": plan["discount"],
                "created_at": SEED_TIMESTAMP,
                "updated_at": SEED_TIMESTAMP,
            }
            for plan in DEFAULT_PLANS
        ],
    )

    op.bulk_insert(
        settings,
        [{"section": section, "key": key, "value": value} for section, key, value in DEFAULT_SETTINGS],
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("settings")
    op.drop_table("statistics")
    op.drop_table("component_views")
    op.drop_table("favorites")
    op.drop_table("components")
    op.drop_table("payments")
    op.drop_table("subscriptions")
    op.drop_table("plans")
    op.drop_table("users")
