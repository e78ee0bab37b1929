# src/comment_stage/models/__init__.py
"""SQLAlchemy models for the Comment Stage application."""

from .comment import (
    COMMENT_STATUS_APPROVED,
    COMMENT_STATUS_PENDING,
    COMMENT_STATUS_REJECTED,
    Comment,
)
from .user import User
from .user_rating import UserRating

__all__ = [
    "Comment",
    "COMMENT_STATUS_APPROVED", "COMMENT_STATUS_PENDING", "COMMENT_STATUS_REJECTED",
    "User",
    "UserRating",
]
