"""quotes, interpretations and upvote membership

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-17 09:12:41.508113

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the quote, interpretation and upvote tables."""
    op.create_table(
        "quotes",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("era", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "interpretations",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("quote_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("author_name", sa.Text(), nullable=True),
        sa.Column("author_avatar_url", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("upvotes >= 0", name="ck_interpretations_upvotes_non_negative"),
        sa.ForeignKeyConstraint(["quote_id"], ["quotes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_interpretations_quote_id", "interpretations", ["quote_id"])
    op.create_table(
        "interpretation_upvotes",
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("interpretation_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(
            ["interpretation_id"], ["interpretations.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("user_id", "interpretation_id"),
    )
    op.create_index("ix_interpretation_upvotes_user_id", "interpretation_upvotes", ["user_id"])


def downgrade() -> None:
    """Drop the quote, interpretation and upvote tables."""
    op.drop_index("ix_interpretation_upvotes_user_id", table_name="interpretation_upvotes")
    op.drop_table("interpretation_upvotes")
    op.drop_index("ix_interpretations_quote_id", table_name="interpretations")
    op.drop_table("interpretations")
    op.drop_table("quotes")
