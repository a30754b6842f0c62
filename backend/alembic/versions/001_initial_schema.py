"""Initial schema.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the product catalog and production record tables."""
    # --- products ---
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sku", sa.String(5), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("shelf_life", sa.Integer(), nullable=False, comment="Days from production to expiry"),
        sa.Column("reminder_days", sa.Integer(), nullable=False, comment="Days before expiry that count as expiring"),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sku"),
        sa.CheckConstraint("shelf_life > 0", name="ck_products_shelf_life_positive"),
        sa.CheckConstraint(
            "reminder_days >= 0 AND reminder_days <= shelf_life",
            name="ck_products_reminder_within_shelf_life",
        ),
    )
    op.create_index("ix_products_sku", "products", ["sku"])

    # --- product_records ---
    op.create_table(
        "product_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sku", sa.String(5), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("production_date", sa.Date(), nullable=False),
        sa.Column("shelf_life", sa.Integer(), nullable=False),
        sa.Column("reminder_days", sa.Integer(), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=False, comment="production_date + shelf_life"),
        sa.Column("alert_date", sa.Date(), nullable=False, comment="expiry_date - reminder_days"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sku", "production_date", name="uq_product_records_sku_production_date"),
        sa.CheckConstraint("shelf_life > 0", name="ck_product_records_shelf_life_positive"),
        sa.CheckConstraint(
            "reminder_days >= 0 AND reminder_days <= shelf_life",
            name="ck_product_records_reminder_within_shelf_life",
        ),
    )
    op.create_index("ix_product_records_sku", "product_records", ["sku"])
    op.create_index("ix_product_records_production_date", "product_records", ["production_date"])
    op.create_index("ix_product_records_alert_date", "product_records", ["alert_date"])
    op.create_index("ix_product_records_expiry", "product_records", ["expiry_date", "production_date"])


def downgrade() -> None:
    """Drop all tables in reverse order."""
    op.drop_index("ix_product_records_expiry", table_name="product_records")
    op.drop_index("ix_product_records_alert_date", table_name="product_records")
    op.drop_index("ix_product_records_production_date", table_name="product_records")
    op.drop_index("ix_product_records_sku", table_name="product_records")
    op.drop_table("product_records")
    op.drop_index("ix_products_sku", table_name="products")
    op.drop_table("products")
