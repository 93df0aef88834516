"""create scores table (append-only quiz attempts)

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "scores",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("time_used", sa.Integer(), nullable=False),
        sa.Column("percentage", sa.Integer(), nullable=False),
        sa.Column("chapter_id", sa.String(100), nullable=False, server_default="overall"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    # Rank counts and leaderboard reads filter by chapter and walk (percentage, time_used)
    op.create_index(
        "ix_scores_chapter_id_percentage_time_used",
        "scores",
        ["chapter_id", "percentage", "time_used"],
    )


def downgrade() -> None:
    op.drop_index("ix_scores_chapter_id_percentage_time_used", table_name="scores")
    op.drop_table("scores")
