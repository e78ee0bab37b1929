"""Data access helpers for working with comments."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from comment_stage.db.session import commit
from comment_stage.models.comment import (
    COMMENT_STATUS_APPROVED,
    COMMENT_STATUS_PENDING,
    Comment,
)

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, comment_id: int) -> Comment | None:
        """Return a comment by identifier."""
        return self.session.get(Comment, comment_id)

    def create_pending(self, *, author_user_id: int, content: str, site_section: str) -> Comment:
        """Insert a new ``pending`` comment and commit it."""
        comment = Comment(
            author_user_id=author_user_id,
            content=content,
            site_section=site_section,
            status=COMMENT_STATUS_PENDING,
        )
        self.session.add(comment)
        commit(self.session)
        self.session.refresh(comment)
        return comment

    def save(self, comment: Comment) -> Comment:
        """Persist pending changes on ``comment`` and return it refreshed."""
        commit(self.session)
        self.session.refresh(comment)
        return comment

    def delete_owned(self, comment_id: int, author_user_id: int) -> bool:
        """Delete a comment only if ``author_user_id`` wrote it.

        Returns:
            True if a row was removed, False if nothing matched.
        """
        result = self.session.execute(
            delete(Comment).where(
                Comment.id == comment_id,
                Comment.author_user_id == author_user_id,
            )
        )
        commit(self.session)
        return bool(result.rowcount)

    def list_by_section(
        self,
        site_section: str,
        *,
        status: str = COMMENT_STATUS_APPROVED,
        limit: int,
        offset: int,
    ) -> list[Comment]:
        """Return comments of one section and status, newest first."""
        stmt = (
            select(Comment)
            .where(Comment.site_section == site_section, Comment.status == status)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))

    def list_by_author(
        self,
        author_user_id: int,
        *,
        status: str | None = None,
        limit: int,
        offset: int,
    ) -> list[Comment]:
        """Return an author's comments newest first, optionally filtered by status."""
        stmt = select(Comment).where(Comment.author_user_id == author_user_id)
        if status is not None:
            stmt = stmt.where(Comment.status == status)
        stmt = stmt.order_by(Comment.created_at.desc(), Comment.id.desc()).limit(limit).offset(offset)
        return list(self.session.scalars(stmt))

    def list_pending_before(self, cutoff: datetime) -> list[Comment]:
        """Return ``pending`` comments created before ``cutoff``, oldest first."""
        stmt = (
            select(Comment)
            .where(Comment.status == COMMENT_STATUS_PENDING, Comment.created_at < cutoff)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(self.session.scalars(stmt))
