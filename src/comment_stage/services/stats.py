"""Read-time aggregates over comments and user ratings.

Nothing here is cached: every call runs a SQL aggregate against committed
rows, so results always reflect the latest writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from comment_stage.models.comment import (
    COMMENT_STATUS_APPROVED,
    COMMENT_STATUS_PENDING,
    COMMENT_STATUS_REJECTED,
    Comment,
)
from comment_stage.models.user_rating import UserRating

RATING_VALUES = (1, 2, 3, 4, 5)


@dataclass(frozen=True)
class CommentStats:
    """Comment totals by status plus the mean author-confirmed rating."""

    total: int
    approved: int
    rejected: int
    pending: int
    avg_final_rating: float | None


@dataclass(frozen=True)
class UserRatingStats:
    """Ratings received by one user."""

    total_ratings: int
    avg_rating: float | None
    histogram: dict[int, int] = field(default_factory=lambda: dict.fromkeys(RATING_VALUES, 0))


@dataclass(frozen=True)
class AuthorCommentCounts:
    """How many comments a user wrote and how many of them were approved."""

    total: int
    approved: int


def _status_count(status: str):
    return func.count(case((Comment.status == status, 1)))


def _mean(value: object) -> float | None:
    # AVG over zero rows is NULL; keep "no ratings" distinct from a 0.0 mean.
    if value is None:
        return None
    return round(float(value), 2)


class RatingAggregator:
    """Computes comment and user rating statistics on demand."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def comment_stats(self, site_section: str | None = None) -> CommentStats:
        """Return statistics for one site section, or across all sections."""
        stmt = select(
            func.count(Comment.id),
            _status_count(COMMENT_STATUS_APPROVED),
            _status_count(COMMENT_STATUS_REJECTED),
            _status_count(COMMENT_STATUS_PENDING),
            # AVG skips NULLs, so approved-but-unrated comments are excluded.
            func.avg(Comment.final_rating),
        )
        if site_section:
            stmt = stmt.where(Comment.site_section == site_section)

        total, approved, rejected, pending, avg_rating = self.db.execute(stmt).one()
        return CommentStats(
            total=int(total or 0),
            approved=int(approved or 0),
            rejected=int(rejected or 0),
            pending=int(pending or 0),
            avg_final_rating=_mean(avg_rating),
        )

    def user_rating_stats(self, user_id: int) -> UserRatingStats:
        """Return count, mean, and 1-5 histogram of ratings ``user_id`` received."""
        rows = self.db.execute(
            select(UserRating.rating, func.count(UserRating.id))
            .where(UserRating.rated_user_id == user_id)
            .group_by(UserRating.rating)
        ).all()

        histogram = dict.fromkeys(RATING_VALUES, 0)
        for rating, count in rows:
            histogram[int(rating)] = int(count)

        total = sum(histogram.values())
        weighted = sum(rating * count for rating, count in histogram.items())
        return UserRatingStats(
            total_ratings=total,
            avg_rating=_mean(weighted / total) if total else None,
            histogram=histogram,
        )

    def author_comment_counts(self, user_id: int) -> AuthorCommentCounts:
        """Return the number of comments a user wrote, total and approved."""
        total, approved = self.db.execute(
            select(func.count(Comment.id), _status_count(COMMENT_STATUS_APPROVED)).where(
                Comment.author_user_id == user_id
            )
        ).one()
        return AuthorCommentCounts(total=int(total or 0), approved=int(approved or 0))
