# src/comment_stage/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    CommentStatsResponse,
    RatingUpdate,
    SubmissionResponse,
)
from .common import ErrorResponse, MessageResponse, Pagination
from .user import (
    GivenRatingListResponse,
    MyRatingResponse,
    ProfileResponse,
    RateUserResponse,
    RatingCreate,
    UserRatingListResponse,
    UserResponse,
)

__all__ = [
    "CommentCreate", "CommentListResponse", "CommentResponse",
    "CommentStatsResponse", "RatingUpdate", "SubmissionResponse",
    "ErrorResponse", "MessageResponse", "Pagination",
    "GivenRatingListResponse", "MyRatingResponse", "ProfileResponse", "RateUserResponse",
    "RatingCreate", "UserRatingListResponse", "UserResponse",
]
