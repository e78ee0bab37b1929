# src/comment_stage/models/user_rating.py
"""Models capturing user-to-user ratings."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from comment_stage.db.session import Base
from comment_stage.db.time import utcnow

from .user import User


class UserRating(Base):
    """One rater's 1-5 rating of another user.

    Re-rating updates the row in place, so ``created_at`` records the first
    rating and ``updated_at`` the latest one.
    """

    __tablename__ = "user_ratings"
    __table_args__ = (
        # One rating per ordered (rater, rated) pair; the upsert conflicts on it.
        UniqueConstraint("rater_user_id", "rated_user_id", name="uq_user_ratings_pair"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_user_ratings_rating"),
        CheckConstraint("rater_user_id <> rated_user_id", name="ck_user_ratings_not_self"),
        Index("ix_user_ratings_rated_user_id", "rated_user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rater_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    rated_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    rater: Mapped[User] = relationship("User", foreign_keys=[rater_user_id], lazy="joined")
    rated_user: Mapped[User] = relationship("User", foreign_keys=[rated_user_id], lazy="joined")
