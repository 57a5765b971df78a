"""Move recently-viewed snapshots out of the session cookie into a table.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One ledger per visitor token, entries stored as a JSON array string
    op.create_table(
        "recently_viewed",
        sa.Column("visitor_id", sa.String(length=64), nullable=False),
        sa.Column("entries", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("visitor_id"),
    )


def downgrade() -> None:
    op.drop_table("recently_viewed")
