"""initial comments, users and user ratings schema

Revision ID: 9c1d2e7a4b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "9c1d2e7a4b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, comments and user_ratings."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("external_identity_id", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("external_identity_id"),
    )
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_user_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("site_section", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("ai_suggested_rating", sa.SmallInteger(), nullable=True),
        sa.Column("final_rating", sa.SmallInteger(), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_comments_status",
        ),
        sa.CheckConstraint(
            "ai_suggested_rating IS NULL OR ai_suggested_rating BETWEEN 1 AND 5",
            name="ck_comments_ai_suggested_rating",
        ),
        sa.CheckConstraint(
            "final_rating IS NULL OR final_rating BETWEEN 1 AND 5",
            name="ck_comments_final_rating",
        ),
        sa.ForeignKeyConstraint(["author_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_comments_site_section_status_created",
        "comments",
        ["site_section", "status", "created_at"],
    )
    op.create_index("ix_comments_author_created", "comments", ["author_user_id", "created_at"])
    op.create_table(
        "user_ratings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("rater_user_id", sa.Integer(), nullable=False),
        sa.Column("rated_user_id", sa.Integer(), nullable=False),
        sa.Column("rating", sa.SmallInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_user_ratings_rating"),
        sa.CheckConstraint("rater_user_id <> rated_user_id", name="ck_user_ratings_not_self"),
        sa.ForeignKeyConstraint(["rater_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["rated_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("rater_user_id", "rated_user_id", name="uq_user_ratings_pair"),
    )
    op.create_index("ix_user_ratings_rated_user_id", "user_ratings", ["rated_user_id"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_user_ratings_rated_user_id", table_name="user_ratings")
    op.drop_table("user_ratings")
    op.drop_index("ix_comments_author_created", table_name="comments")
    op.drop_index("ix_comments_site_section_status_created", table_name="comments")
    op.drop_table("comments")
    op.drop_table("users")
