"""Create forum tables

Revision ID: 001
Revises: None
Create Date: 2024-03-01 00:00:00.000000+00:00

What:  Creates `tags`, `questions`, `answers` and the `question_tags`
       association table.

Rollback: downgrade() drops all four tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "tags",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "name",
            sa.String(64),
            nullable=False,
            comment="Tag name as first submitted; unique ignoring case",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Case-insensitive uniqueness of tag names
    op.create_index(
        "uq_tags_name_lower",
        "tags",
        [sa.text("lower(name)")],
        unique=True,
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "asked_by",
            sa.String(100),
            nullable=False,
            comment="Username of the asker",
        ),
        sa.Column(
            "ask_date_time",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When the question was asked (UTC); drives 'newest' ordering",
        ),
        sa.Column(
            "views",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_questions_ask_date_time", "questions", ["ask_date_time"])

    op.create_table(
        "answers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "ans_by",
            sa.String(100),
            nullable=False,
            comment="Username of the author",
        ),
        sa.Column(
            "ans_date_time",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When the answer was posted (UTC); drives 'active' ordering",
        ),
        sa.Column("question_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_answers_question_id", "answers", ["question_id"])

    op.create_table(
        "question_tags",
        sa.Column("question_id", sa.Uuid(), nullable=False),
        sa.Column("tag_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"]),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"]),
        sa.PrimaryKeyConstraint("question_id", "tag_id"),
    )
    op.create_index("idx_question_tags_tag_id", "question_tags", ["tag_id"])


def downgrade() -> None:
    """Drop every forum table. Destructive: all data is lost."""
    op.drop_index("idx_question_tags_tag_id", table_name="question_tags")
    op.drop_table("question_tags")
    op.drop_index("idx_answers_question_id", table_name="answers")
    op.drop_table("answers")
    op.drop_index("idx_questions_ask_date_time", table_name="questions")
    op.drop_table("questions")
    op.drop_index("uq_tags_name_lower", table_name="tags")
    op.drop_table("tags")
