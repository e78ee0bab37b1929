"""User and user-rating Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field, StrictInt

from .comment import AuthorSummary, CommentResponse
from .common import CamelModel, Pagination


class UserResponse(CamelModel):
    """The authenticated user's own account."""

    id: int
    external_identity_id: str
    email: str
    display_name: str
    avatar_url: str | None
    created_at: datetime


class RatingCreate(CamelModel):
    """Schema for rating another user."""

    rating: StrictInt = Field(..., description="Rating from 1 to 5")


class UserRatingResponse(CamelModel):
    """A rating as seen by the rated user's profile."""

    id: int
    rating: int
    rater: AuthorSummary | None = None
    created_at: datetime
    updated_at: datetime


class RatingStatsResponse(CamelModel):
    """Ratings received by a user."""

    total_ratings: int
    avg_rating: float | None
    histogram: dict[int, int]


class ProfileBody(CamelModel):
    """Public profile with activity counters."""

    id: int
    display_name: str
    avatar_url: str | None
    total_comments: int
    approved_comments: int
    avg_rating: float | None
    total_ratings: int
    created_at: datetime


class ProfileResponse(CamelModel):
    """Response to ``GET /api/users/{id}/profile``."""

    profile: ProfileBody
    rating_stats: RatingStatsResponse


class RateUserResponse(CamelModel):
    """Response to ``POST /api/users/{id}/ratings``."""

    message: str
    rating: UserRatingResponse
    rating_stats: RatingStatsResponse


class MyRatingResponse(CamelModel):
    """The caller's rating of a user, if any."""

    has_rated: bool
    rating: UserRatingResponse | None


class UserRatingListResponse(CamelModel):
    """Page of ratings a user received."""

    user_id: int
    ratings: list[UserRatingResponse]
    pagination: Pagination


class UserCommentsResponse(CamelModel):
    """Page of comments shown on a user's profile."""

    user_id: int
    comments: list[CommentResponse]
    pagination: Pagination


class GivenRatingResponse(CamelModel):
    """A rating as seen from the rater's side."""

    id: int
    rating: int
    rated_user: AuthorSummary | None = None
    created_at: datetime
    updated_at: datetime


class GivenRatingListResponse(CamelModel):
    """Page of ratings a user gave."""

    user_id: int
    ratings: list[GivenRatingResponse]
    pagination: Pagination
