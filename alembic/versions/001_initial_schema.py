"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the saved_customer_lists table.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the saved list table."""

    # -- saved_customer_lists --
    op.create_table(
        "saved_customer_lists",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("shop", sa.String(255), nullable=False),
        sa.Column("list_name", sa.String(255), nullable=False),
        sa.Column(
            "query_data",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "customer_ids",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("source", sa.String(20), nullable=False, server_default="filter-audience"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("shop", "list_name", name="uq_saved_list_shop_name"),
    )
    op.create_index("ix_saved_customer_lists_shop", "saved_customer_lists", ["shop"])
    op.create_index("idx_saved_list_shop_status", "saved_customer_lists", ["shop", "status"])


def downgrade() -> None:
    op.drop_index("idx_saved_list_shop_status", table_name="saved_customer_lists")
    op.drop_index("ix_saved_customer_lists_shop", table_name="saved_customer_lists")
    op.drop_table("saved_customer_lists")
