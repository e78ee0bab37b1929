"""Helpers for managing signed-in users."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from comment_stage.core.errors import NotFoundError
from comment_stage.db.session import commit
from comment_stage.models.user import User

__all__ = [
    "get_user",
    "require_user",
    "sign_in",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def require_user(db: Session, user_id: int) -> User:
    """Return a user by primary key or raise ``NotFoundError``."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def sign_in(
    db: Session,
    *,
    external_identity_id: str,
    email: str,
    display_name: str,
    avatar_url: str | None = None,
) -> User:
    """Create the user on first sign-in, refresh profile fields afterwards.

    The external identity id and ``created_at`` never change once stored.
    """
    user = db.scalars(
        select(User).where(User.external_identity_id == external_identity_id)
    ).first()
    if user is None:
        user = User(
            external_identity_id=external_identity_id,
            email=email,
            display_name=display_name,
            avatar_url=avatar_url,
        )
        db.add(user)
        logger.info("Registered new user for external identity %s", external_identity_id)
    else:
        user.email = email
        user.display_name = display_name
        user.avatar_url = avatar_url

    commit(db)
    db.refresh(user)
    return user
