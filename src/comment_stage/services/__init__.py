# src/comment_stage/services/__init__.py
"""Business logic services for the Comment Stage application."""

from .comments import CommentService, Submission
from .moderation import (
    GeminiModerationClient,
    ModerationOracle,
    ModerationUnavailable,
    ModerationVerdict,
)
from .ratings import UserRatingLedger
from .stats import RatingAggregator

__all__ = [
    "CommentService",
    "Submission",
    "GeminiModerationClient",
    "ModerationOracle",
    "ModerationUnavailable",
    "ModerationVerdict",
    "RatingAggregator",
    "UserRatingLedger",
]
