"""Comment-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field, StrictInt

from .common import CamelModel, Pagination


class CommentCreate(CamelModel):
    """Schema for submitting a new comment."""

    content: str = Field(..., description="Comment text (1-5000 characters once trimmed)")
    site_section: str | None = Field(None, description="Site section; defaults to 'general'")


class RatingUpdate(CamelModel):
    """Author-confirmed rating for an approved comment."""

    rating: StrictInt = Field(..., description="Final rating from 1 to 5")


class AuthorSummary(CamelModel):
    """Minimal public identity shown next to comments and ratings."""

    id: int
    display_name: str
    avatar_url: str | None = None


class CommentResponse(CamelModel):
    """Schema for comment information returned by the API."""

    id: int
    author_user_id: int
    author: AuthorSummary | None = None
    content: str
    site_section: str
    status: str
    ai_suggested_rating: int | None
    final_rating: int | None
    rejection_reason: str | None
    created_at: datetime
    updated_at: datetime


class ModerationSummary(CamelModel):
    """What the moderation step decided for a submission."""

    approved: bool
    suggested_rating: int | None = None
    reason: str | None = None
    feedback: str | None = None
    available: bool = True


class SubmissionResponse(CamelModel):
    """Response to ``POST /api/comments``."""

    status: str
    comment: CommentResponse
    moderation: ModerationSummary


class CommentEnvelope(CamelModel):
    """Single comment wrapper."""

    comment: CommentResponse


class CommentListResponse(CamelModel):
    """Page of comments."""

    comments: list[CommentResponse]
    pagination: Pagination


class CommentStatsBody(CamelModel):
    """Comment totals by status and mean final rating."""

    total: int
    approved: int
    rejected: int
    pending: int
    avg_final_rating: float | None


class CommentStatsResponse(CamelModel):
    """Response to ``GET /api/comments/stats``."""

    site_section: str | None
    stats: CommentStatsBody
