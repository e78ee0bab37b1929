"""Repositories wrapping SQL access for comments and ratings."""

from .comment_repo import CommentRepository
from .rating_repo import UserRatingRepository

__all__ = ["CommentRepository", "UserRatingRepository"]
