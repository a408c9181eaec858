"""Initial catalog and identity schema

Revision ID: 001_catalog_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

Changes:
- Add catalog_brands, catalog_types and catalog_items tables
- Add user_accounts table for demo and admin sign-in
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_catalog_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =========================================================================
    # 1. Brands and types (referenced by items)
    # =========================================================================
    op.create_table(
        "catalog_brands",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True, comment="Natural key"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "catalog_types",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True, comment="Natural key"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # =========================================================================
    # 2. Items
    # =========================================================================
    op.create_table(
        "catalog_items",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True, comment="Natural key"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("picture_uri", sa.String(255), nullable=True),
        sa.Column(
            "catalog_brand_id",
            sa.Uuid(),
            sa.ForeignKey("catalog_brands.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "catalog_type_id",
            sa.Uuid(),
            sa.ForeignKey("catalog_types.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_catalog_items_catalog_brand_id", "catalog_items", ["catalog_brand_id"])
    op.create_index("ix_catalog_items_catalog_type_id", "catalog_items", ["catalog_type_id"])

    # =========================================================================
    # 3. Identity accounts
    # =========================================================================
    op.create_table(
        "user_accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "email",
            sa.String(255),
            nullable=False,
            comment="Natural key, stored lowercase",
        ),
        sa.Column("password_hash", sa.String(255), nullable=False, comment="Bcrypt password hash"),
        sa.Column("role", sa.String(50), nullable=True, comment="Role name, e.g. Administrators"),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_user_accounts_email", "user_accounts", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_user_accounts_email", table_name="user_accounts")
    op.drop_table("user_accounts")
    op.drop_index("ix_catalog_items_catalog_type_id", table_name="catalog_items")
    op.drop_index("ix_catalog_items_catalog_brand_id", table_name="catalog_items")
    op.drop_table("catalog_items")
    op.drop_table("catalog_types")
    op.drop_table("catalog_brands")
