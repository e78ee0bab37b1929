# tests/helpers.py
"""Shared builders for test data and a scripted moderation oracle."""

from __future__ import annotations

from datetime import timedelta
from itertools import count

from sqlalchemy.orm import Session

from comment_stage.db.time import utcnow
from comment_stage.models import COMMENT_STATUS_PENDING, Comment, User
from comment_stage.services.moderation import ModerationOutcome, ModerationVerdict

_IDENTITY_COUNTER = count(1)


class FakeModerationOracle:
    """In-process oracle returning a configurable outcome."""

    def __init__(self, outcome: ModerationOutcome | None = None) -> None:
        self.outcome = outcome or ModerationVerdict(
            approved=True, rating=4, feedback="Constructive and polite."
        )
        self.calls: list[str] = []
        self.closed = False

    async def moderate(self, text: str) -> ModerationOutcome:
        self.calls.append(text)
        return self.outcome

    async def close(self) -> None:
        self.closed = True


def make_user(db: Session, display_name: str) -> User:
    """Persist a user as if they had just signed in."""
    seq = next(_IDENTITY_COUNTER)
    user = User(
        external_identity_id=f"google-{seq}",
        email=f"user{seq}@example.com",
        display_name=display_name,
        avatar_url=f"https://example.com/avatar/{seq}.png",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_comment(
    db: Session,
    author: User,
    *,
    content: str = "A comment",
    site_section: str = "general",
    status: str = COMMENT_STATUS_PENDING,
    ai_suggested_rating: int | None = None,
    final_rating: int | None = None,
    rejection_reason: str | None = None,
    age: timedelta = timedelta(0),
) -> Comment:
    """Insert a comment row directly, bypassing the lifecycle service."""
    created = utcnow() - age
    comment = Comment(
        author_user_id=author.id,
        content=content,
        site_section=site_section,
        status=status,
        ai_suggested_rating=ai_suggested_rating,
        final_rating=final_rating,
        rejection_reason=rejection_reason,
        created_at=created,
        updated_at=created,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment
