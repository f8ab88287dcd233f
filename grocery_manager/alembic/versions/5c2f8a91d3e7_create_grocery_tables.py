"""create settings, items, grocery_items

Revision ID: 5c2f8a91d3e7
Revises:
Create Date: 2026-09-14
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c2f8a91d3e7"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PK = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "settings",
        sa.Column("id", PK, primary_key=True),
        sa.Column("key", sa.String(64), nullable=False),
        sa.Column("value", sa.String(64), nullable=False),
        sa.UniqueConstraint("key", name="uq_settings_key"),
    )

    op.create_table(
        "items",
        sa.Column("id", PK, primary_key=True),
        sa.Column("item_no", sa.String(64), nullable=False, unique=True),
        sa.Column("item_name", sa.String(255), nullable=False),
        sa.Column("size", sa.String(64), nullable=False, server_default=""),
        sa.Column("current_stock_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("desired_stock_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("current_stock_level >= 0", name="ck_items_current_nonneg"),
        sa.CheckConstraint("desired_stock_level >= 0", name="ck_items_desired_nonneg"),
    )

    op.create_table(
        "grocery_items",
        sa.Column("id", PK, primary_key=True),
        sa.Column("input", sa.String(64)),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("processed", sa.Boolean()),
    )


def downgrade() -> None:
    op.drop_table("grocery_items")
    op.drop_table("items")
    op.drop_table("settings")
