"""Search result cache table.

Revision ID: 001
Revises:
Create Date: 2026-10-18

web_search_results holds one row per cached search result, keyed by the
normalized query text and filtered on cached_until at read time.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "web_search_results",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), nullable=False),
        sa.Column("query", sa.Text(), nullable=False, comment="Lowercased, trimmed query text"),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("source_url", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("source_name", sa.String(32), nullable=False, comment="guide-source | forum-source | video-source"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("relevance_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cached_until", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Lookup by exact query with the expiry predicate
    op.create_index(
        "ix_web_search_results_lookup",
        "web_search_results",
        ["query", "cached_until"],
    )


def downgrade() -> None:
    op.drop_index("ix_web_search_results_lookup", table_name="web_search_results")
    op.drop_table("web_search_results")
