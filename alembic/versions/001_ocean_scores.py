"""Initial schema — ocean_scores table.

Revision ID: 001_ocean_scores
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_ocean_scores"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── 1. ocean_scores ─────────────────────────────────────────────
    op.create_table(
        "ocean_scores",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("response_id", sa.String, nullable=False),
        sa.Column("assessment_id", sa.String, nullable=False),
        sa.Column(
            "raw",
            postgresql.JSONB,
            nullable=False,
            comment="5 raw trait scores (1-5)",
        ),
        sa.Column(
            "percentile",
            postgresql.JSONB,
            nullable=False,
            comment="5 trait percentiles (1-99)",
        ),
        sa.Column(
            "stanine",
            postgresql.JSONB,
            nullable=False,
            comment="5 trait stanines (1-9)",
        ),
        sa.Column(
            "facets",
            postgresql.JSONB,
            nullable=True,
            comment="Facet code -> mean score",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_ocean_scores_response_id",
        "ocean_scores",
        ["response_id"],
        unique=True,
    )
    op.create_index(
        "ix_ocean_scores_assessment_id",
        "ocean_scores",
        ["assessment_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_ocean_scores_assessment_id", table_name="ocean_scores")
    op.drop_index("ix_ocean_scores_response_id", table_name="ocean_scores")
    op.drop_table("ocean_scores")
