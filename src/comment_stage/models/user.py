# src/comment_stage/models/user.py
"""SQLAlchemy model for signed-in user identities."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from comment_stage.db.session import Base
from comment_stage.db.time import utcnow


class User(Base):
    """Identity created on first external sign-in.

    ``external_identity_id`` is the subject issued by the identity provider;
    only the profile fields are refreshed on later sign-ins.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_identity_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
