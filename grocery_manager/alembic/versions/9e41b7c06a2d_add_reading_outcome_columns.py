"""add grocery_items outcome / error / processed_at

Revision ID: 9e41b7c06a2d
Revises: 5c2f8a91d3e7
Create Date: 2026-09-28
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "9e41b7c06a2d"
down_revision: Union[str, Sequence[str], None] = "5c2f8a91d3e7"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLE_NAME = "grocery_items"

# SQLAlchemy stocke le NOM des membres de ReadingOutcome
OUTCOME = sa.Enum("decremented", "missing_input", "unknown_item", "failed", name="reading_outcome")


def upgrade() -> None:
    OUTCOME.create(op.get_bind(), checkfirst=True)

    op.add_column(TABLE_NAME, sa.Column("processed_at", sa.DateTime(timezone=True)))
    op.add_column(TABLE_NAME, sa.Column("outcome", OUTCOME))
    op.add_column(TABLE_NAME, sa.Column("error", sa.Text()))

    # Les anciens readings déjà traités n'ont pas d'outcome : on les laisse à NULL.
    op.create_index("ix_grocery_items_processed", TABLE_NAME, ["processed"])


def downgrade() -> None:
    op.drop_index("ix_grocery_items_processed", table_name=TABLE_NAME)
    with op.batch_alter_table(TABLE_NAME) as batch_op:
        batch_op.drop_column("error")
        batch_op.drop_column("outcome")
        batch_op.drop_column("processed_at")
    OUTCOME.drop(op.get_bind(), checkfirst=True)
