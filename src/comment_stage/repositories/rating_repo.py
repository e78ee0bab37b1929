"""Data access helpers for the user rating ledger."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from comment_stage.core.errors import StorageError
from comment_stage.db.session import commit
from comment_stage.models.user_rating import UserRating

__all__ = ["UserRatingRepository"]

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UserRatingRepository:
    """Database access for :class:`UserRating` rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def upsert(self, *, rater_user_id: int, rated_user_id: int, rating: int, now: datetime) -> UserRating:
        """Insert or update the rating for one (rater, rated) pair atomically.

        A single ``INSERT ... ON CONFLICT DO UPDATE`` keyed on the pair's unique
        constraint, so concurrent writers cannot create duplicates and the last
        committed value wins. ``created_at`` and ``id`` of an existing row are
        left untouched.
        """
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            logger.error("Rating upsert is not supported on dialect %r", dialect)
            raise StorageError()

        stmt = insert(UserRating).values(
            rater_user_id=rater_user_id,
            rated_user_id=rated_user_id,
            rating=rating,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserRating.rater_user_id, UserRating.rated_user_id],
            set_={"rating": stmt.excluded.rating, "updated_at": stmt.excluded.updated_at},
        )
        self.session.execute(stmt)
        commit(self.session)

        row = self.find(rater_user_id, rated_user_id)
        if row is None:  # pragma: no cover - deleted by a concurrent unrate
            raise StorageError()
        return row

    def find(self, rater_user_id: int, rated_user_id: int) -> UserRating | None:
        """Return the rating one user gave another, if any."""
        stmt = (
            select(UserRating)
            .where(
                UserRating.rater_user_id == rater_user_id,
                UserRating.rated_user_id == rated_user_id,
            )
            # The upsert bypasses the identity map; always reload column values.
            .execution_options(populate_existing=True)
        )
        return self.session.scalars(stmt).first()

    def delete(self, rater_user_id: int, rated_user_id: int) -> bool:
        """Remove a rating; return False when there was nothing to remove."""
        result = self.session.execute(
            delete(UserRating).where(
                UserRating.rater_user_id == rater_user_id,
                UserRating.rated_user_id == rated_user_id,
            )
        )
        commit(self.session)
        return bool(result.rowcount)

    def list_received_by(self, rated_user_id: int, *, limit: int, offset: int) -> list[UserRating]:
        """Return ratings a user received, newest first, raters eagerly loaded."""
        stmt = (
            select(UserRating)
            .where(UserRating.rated_user_id == rated_user_id)
            .order_by(UserRating.created_at.desc(), UserRating.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))

    def list_given_by(self, rater_user_id: int, *, limit: int, offset: int) -> list[UserRating]:
        """Return ratings a user gave, newest first, rated users eagerly loaded."""
        stmt = (
            select(UserRating)
            .where(UserRating.rater_user_id == rater_user_id)
            .order_by(UserRating.created_at.desc(), UserRating.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))
