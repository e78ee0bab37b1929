"""Comment lifecycle: submission, moderation, rating confirmation, listing.

State machine::

    pending --oracle approves--> approved --author confirms--> approved (rated)
    pending --oracle rejects---> rejected

No transition returns a comment to ``pending``. A rejected comment is never
edited; the client submits a new one instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.orm import Session

from comment_stage.core.errors import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from comment_stage.core.settings import settings
from comment_stage.db.time import utcnow
from comment_stage.models.comment import (
    COMMENT_STATUS_APPROVED,
    COMMENT_STATUS_REJECTED,
    Comment,
)
from comment_stage.repositories.comment_repo import CommentRepository
from comment_stage.services.moderation import (
    ModerationOracle,
    ModerationUnavailable,
    ModerationVerdict,
)

logger = logging.getLogger(__name__)

SITE_SECTION_MAX_LENGTH = 100
FAIL_OPEN_FEEDBACK = (
    "AI moderation service temporarily unavailable. Comment approved by default."
)
DEFAULT_REJECTION_REASON = "Comment does not meet the community guidelines."


@dataclass(frozen=True)
class Submission:
    """Outcome of :meth:`CommentService.submit`."""

    comment: Comment
    feedback: str | None
    moderation_available: bool


def validate_rating(rating: object) -> int:
    """Return ``rating`` if it is an integer from 1 to 5, else raise."""
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError("Rating must be an integer between 1 and 5")
    return rating


def _suggested_rating(value: object) -> int:
    # Anything outside 1-5 would fail ck_comments_ai_suggested_rating on commit.
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 5:
        return settings.default_suggested_rating
    return value


class CommentService:
    """Owns the comment state machine and drives the moderation oracle."""

    def __init__(self, db: Session, oracle: ModerationOracle | None = None) -> None:
        self.db = db
        self.oracle = oracle
        self.repo = CommentRepository(db)

    def _normalize_content(self, content: object) -> str:
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Comment content is required")
        # The limit applies to the text as submitted, surrounding whitespace included.
        if len(content) > settings.comment_max_length:
            raise ValidationError(
                f"Comment is too long (max {settings.comment_max_length} characters)"
            )
        return content.strip()

    @staticmethod
    def _normalize_section(site_section: str | None) -> str:
        section = (site_section or "").strip() or settings.default_site_section
        if len(section) > SITE_SECTION_MAX_LENGTH:
            raise ValidationError(
                f"Site section is too long (max {SITE_SECTION_MAX_LENGTH} characters)"
            )
        return section

    def _apply_outcome(
        self,
        comment: Comment,
        outcome: ModerationVerdict | ModerationUnavailable,
    ) -> Submission:
        """Move a pending comment to its terminal status and persist it."""
        if isinstance(outcome, ModerationVerdict) and outcome.approved:
            comment.status = COMMENT_STATUS_APPROVED
            comment.ai_suggested_rating = _suggested_rating(outcome.rating)
            comment.rejection_reason = None
            feedback = outcome.feedback
            available = True
        elif isinstance(outcome, ModerationVerdict):
            comment.status = COMMENT_STATUS_REJECTED
            comment.ai_suggested_rating = None
            comment.final_rating = None
            comment.rejection_reason = outcome.reason or DEFAULT_REJECTION_REASON
            feedback = outcome.feedback
            available = True
        else:
            # Fail-open product decision: availability over strict moderation.
            logger.warning(
                "Approving comment %s without moderation: %s", comment.id, outcome.reason
            )
            comment.status = COMMENT_STATUS_APPROVED
            comment.ai_suggested_rating = settings.default_suggested_rating
            comment.rejection_reason = None
            feedback = FAIL_OPEN_FEEDBACK
            available = False

        self.repo.save(comment)
        logger.info(
            "Comment %s moderated: status=%s suggested_rating=%s",
            comment.id,
            comment.status,
            comment.ai_suggested_rating,
        )
        return Submission(comment=comment, feedback=feedback, moderation_available=available)

    async def _moderate(self, comment: Comment) -> Submission:
        if self.oracle is None:
            outcome: ModerationVerdict | ModerationUnavailable = ModerationUnavailable(
                reason="No moderation oracle configured"
            )
        else:
            try:
                outcome = await self.oracle.moderate(comment.content)
            except Exception as exc:
                logger.warning(
                    "Moderation oracle failed for comment %s", comment.id, exc_info=True
                )
                outcome = ModerationUnavailable(reason=f"Moderation oracle error: {exc!r}")
            if not isinstance(outcome, (ModerationVerdict, ModerationUnavailable)):
                outcome = ModerationUnavailable(reason="Unexpected moderation result")
        return self._apply_outcome(comment, outcome)

    async def submit(self, author_id: int, content: str, site_section: str | None) -> Submission:
        """Persist a comment as pending, moderate it, and persist the result.

        Args:
            author_id: Authenticated caller submitting the comment.
            content: Raw comment text; stored and moderated trimmed.
            site_section: Namespace tag; blank means the default section.

        Returns:
            The comment in a terminal status together with oracle feedback.

        Raises:
            ValidationError: If the content is empty or too long, or the
                section name is too long. Nothing is persisted in that case.
        """
        text = self._normalize_content(content)
        section = self._normalize_section(site_section)

        comment = self.repo.create_pending(
            author_user_id=author_id,
            content=text,
            site_section=section,
        )
        return await self._moderate(comment)

    def confirm_rating(self, comment_id: int, caller_id: int, rating: int) -> Comment:
        """Set the author-confirmed final rating of an approved comment.

        Re-confirming the current value performs no write.

        Raises:
            ValidationError: If ``rating`` is not an integer from 1 to 5.
            NotFoundError: If the comment does not exist.
            ForbiddenError: If the caller is not the author.
            InvalidStateError: If the comment is not approved.
        """
        value = validate_rating(rating)

        comment = self.repo.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if comment.author_user_id != caller_id:
            raise ForbiddenError("Not authorized to update this comment")
        if comment.status != COMMENT_STATUS_APPROVED:
            raise InvalidStateError("Can only update rating for approved comments")

        if comment.final_rating == value:
            return comment

        comment.final_rating = value
        return self.repo.save(comment)

    def delete(self, comment_id: int, caller_id: int) -> bool:
        """Delete the caller's own comment; False if there was no such comment."""
        deleted = self.repo.delete_owned(comment_id, caller_id)
        if deleted:
            logger.info("Comment %s deleted by its author", comment_id)
        return deleted

    def list_by_section(
        self,
        site_section: str | None,
        status: str = COMMENT_STATUS_APPROVED,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Comment]:
        """Public listing for one section; only approved comments are ever returned."""
        if status != COMMENT_STATUS_APPROVED:
            logger.debug("Ignoring requested status %r on public listing", status)
        return self.repo.list_by_section(
            self._normalize_section(site_section),
            status=COMMENT_STATUS_APPROVED,
            limit=limit,
            offset=offset,
        )

    def list_by_author(self, author_id: int, limit: int = 50, offset: int = 0) -> list[Comment]:
        """All of an author's comments in every status; for the author only."""
        return self.repo.list_by_author(author_id, limit=limit, offset=offset)

    def list_public_by_author(
        self,
        author_id: int,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Comment]:
        """An author's approved comments, as shown to other users."""
        return self.repo.list_by_author(
            author_id,
            status=COMMENT_STATUS_APPROVED,
            limit=limit,
            offset=offset,
        )

    async def reconcile_pending(self, older_than: timedelta) -> int:
        """Re-moderate comments stuck in ``pending``.

        A crash between persisting a pending comment and persisting its
        moderation outcome leaves the row pending. Rows older than
        ``older_than`` are sent through the oracle again with the same rules
        as :meth:`submit`.

        Returns:
            Number of comments driven to a terminal status.
        """
        stale = self.repo.list_pending_before(utcnow() - older_than)
        for comment in stale:
            await self._moderate(comment)
        if stale:
            logger.info("Reconciled %d pending comments", len(stale))
        return len(stale)
