# src/comment_stage/models/comment.py
"""Models for moderated comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from comment_stage.db.session import Base
from comment_stage.db.time import utcnow

from .user import User

# Moderation state machine: pending -> approved | rejected. Nothing returns to pending.
COMMENT_STATUS_PENDING = "pending"
COMMENT_STATUS_APPROVED = "approved"
COMMENT_STATUS_REJECTED = "rejected"


class Comment(Base):
    """A short text comment posted against a site section.

    ``ai_suggested_rating`` is written once by the moderation step;
    ``final_rating`` is set by the author after reviewing the suggestion.
    """

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_comments_status",
        ),
        CheckConstraint(
            "ai_suggested_rating IS NULL OR ai_suggested_rating BETWEEN 1 AND 5",
            name="ck_comments_ai_suggested_rating",
        ),
        CheckConstraint(
            "final_rating IS NULL OR final_rating BETWEEN 1 AND 5",
            name="ck_comments_final_rating",
        ),
        Index("ix_comments_site_section_status_created", "site_section", "status", "created_at"),
        Index("ix_comments_author_created", "author_user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    site_section: Mapped[str] = mapped_column(String(100), nullable=False, default="general")
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=COMMENT_STATUS_PENDING,
    )
    ai_suggested_rating: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    final_rating: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped[User] = relationship("User", lazy="joined")
