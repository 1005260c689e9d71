"""Baseline schema -- questions, answers, and the two vote logs.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: str | None = None


def _timestamps() -> list[sa.Column]:  # type: ignore[type-arg]
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "questions",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_questions_created_at", "questions", ["created_at"])

    op.create_table(
        "answers",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("question_id", sa.String(24), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_answers_question_id", "answers", ["question_id"])

    op.create_table(
        "question_votes",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("question_id", sa.String(24), nullable=False),
        sa.Column("vote", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_question_votes_question_id", "question_votes", ["question_id"]
    )

    op.create_table(
        "answer_votes",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("answer_id", sa.String(24), nullable=False),
        sa.Column("vote", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_answer_votes_answer_id", "answer_votes", ["answer_id"])


def downgrade() -> None:
    op.drop_table("answer_votes")
    op.drop_table("question_votes")
    op.drop_table("answers")
    op.drop_table("questions")
