"""User rating ledger: at most one rating per (rater, rated) pair."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from comment_stage.core.errors import NotFoundError, SelfRatingError
from comment_stage.db.time import utcnow
from comment_stage.models.user import User
from comment_stage.models.user_rating import UserRating
from comment_stage.repositories.rating_repo import UserRatingRepository
from comment_stage.services.comments import validate_rating

logger = logging.getLogger(__name__)


class UserRatingLedger:
    """Service handling user-to-user ratings."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = UserRatingRepository(db)

    def rate(self, rater_id: int, rated_id: int, rating: int) -> UserRating:
        """Create or replace the rating ``rater_id`` gives ``rated_id``.

        Args:
            rater_id: Authenticated caller.
            rated_id: User being rated.
            rating: Integer from 1 to 5.

        Returns:
            The stored rating. On re-rating the row keeps its id and
            ``created_at``; ``rating`` and ``updated_at`` change.

        Raises:
            ValidationError: If ``rating`` is not an integer from 1 to 5.
            SelfRatingError: If a user tries to rate themselves.
            NotFoundError: If the rated user does not exist.
        """
        value = validate_rating(rating)
        if rater_id == rated_id:
            raise SelfRatingError()
        if self.db.get(User, rated_id) is None:
            raise NotFoundError("User not found")

        stored = self.repo.upsert(
            rater_user_id=rater_id,
            rated_user_id=rated_id,
            rating=value,
            now=utcnow(),
        )
        logger.info("User %s rated user %s with %s", rater_id, rated_id, value)
        return stored

    def unrate(self, rater_id: int, rated_id: int) -> bool:
        """Remove a rating; False when the pair had no rating."""
        return self.repo.delete(rater_id, rated_id)

    def find(self, rater_id: int, rated_id: int) -> UserRating | None:
        """Return the rating ``rater_id`` gave ``rated_id``, if any."""
        return self.repo.find(rater_id, rated_id)

    def list_received_by(self, user_id: int, limit: int = 50, offset: int = 0) -> list[UserRating]:
        """Ratings a user received, newest first, with rater identity loaded."""
        return self.repo.list_received_by(user_id, limit=limit, offset=offset)

    def list_given_by(self, user_id: int, limit: int = 50, offset: int = 0) -> list[UserRating]:
        """Ratings a user gave, newest first, with rated user identity loaded."""
        return self.repo.list_given_by(user_id, limit=limit, offset=offset)
