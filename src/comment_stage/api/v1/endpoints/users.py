# src/comment_stage/api/v1/endpoints/users.py
"""User profile and user-rating endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from comment_stage.schemas.comment import CommentResponse
from comment_stage.schemas.common import MessageResponse, Pagination
from comment_stage.schemas.user import (
    GivenRatingListResponse,
    GivenRatingResponse,
    MyRatingResponse,
    ProfileBody,
    ProfileResponse,
    RateUserResponse,
    RatingCreate,
    RatingStatsResponse,
    UserCommentsResponse,
    UserRatingListResponse,
    UserRatingResponse,
)
from comment_stage.services.stats import RatingAggregator
from comment_stage.services.users import require_user

from ..dependencies import (
    AggregatorDep,
    CommentServiceDep,
    CurrentUserDep,
    OptionalUserDep,
    RatingLedgerDep,
    SessionDep,
)

router = APIRouter(prefix="/users", tags=["users"])


def _rating_stats(aggregator: RatingAggregator, user_id: int) -> RatingStatsResponse:
    return RatingStatsResponse.model_validate(aggregator.user_rating_stats(user_id))


@router.get("/{user_id}/profile", response_model=ProfileResponse)
async def get_user_profile(
    user_id: int,
    db: SessionDep,
    aggregator: AggregatorDep,
) -> ProfileResponse:
    """Return a public profile with comment counts and received-rating stats."""
    user = require_user(db, user_id)
    rating_stats = _rating_stats(aggregator, user_id)
    counts = aggregator.author_comment_counts(user_id)

    return ProfileResponse(
        profile=ProfileBody(
            id=user.id,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            total_comments=counts.total,
            approved_comments=counts.approved,
            avg_rating=rating_stats.avg_rating,
            total_ratings=rating_stats.total_ratings,
            created_at=user.created_at,
        ),
        rating_stats=rating_stats,
    )


@router.post("/{user_id}/ratings", response_model=RateUserResponse)
async def rate_user(
    user_id: int,
    payload: RatingCreate,
    current_user: CurrentUserDep,
    ledger: RatingLedgerDep,
    aggregator: AggregatorDep,
) -> RateUserResponse:
    """Rate another user; re-rating replaces the previous value."""
    stored = ledger.rate(current_user.id, user_id, payload.rating)
    return RateUserResponse(
        message="User rated successfully",
        rating=UserRatingResponse.model_validate(stored),
        rating_stats=_rating_stats(aggregator, user_id),
    )


@router.get("/{user_id}/ratings", response_model=UserRatingListResponse)
async def list_user_ratings(
    user_id: int,
    db: SessionDep,
    ledger: RatingLedgerDep,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> UserRatingListResponse:
    """List ratings the user received, newest first."""
    require_user(db, user_id)
    ratings = ledger.list_received_by(user_id, limit=limit, offset=offset)
    return UserRatingListResponse(
        user_id=user_id,
        ratings=[UserRatingResponse.model_validate(rating) for rating in ratings],
        pagination=Pagination.for_page(ratings, limit, offset),
    )


@router.get("/{user_id}/ratings-given", response_model=GivenRatingListResponse)
async def list_ratings_given(
    user_id: int,
    db: SessionDep,
    ledger: RatingLedgerDep,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> GivenRatingListResponse:
    """List ratings the user gave to others, newest first."""
    require_user(db, user_id)
    ratings = ledger.list_given_by(user_id, limit=limit, offset=offset)
    return GivenRatingListResponse(
        user_id=user_id,
        ratings=[GivenRatingResponse.model_validate(rating) for rating in ratings],
        pagination=Pagination.for_page(ratings, limit, offset),
    )


@router.delete("/{user_id}/ratings", response_model=MessageResponse)
async def delete_user_rating(
    user_id: int,
    current_user: CurrentUserDep,
    ledger: RatingLedgerDep,
) -> MessageResponse:
    """Withdraw the caller's rating of a user."""
    if not ledger.unrate(current_user.id, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rating not found")
    return MessageResponse(message="Rating deleted successfully")


@router.get("/{user_id}/my-rating", response_model=MyRatingResponse)
async def get_my_rating(
    user_id: int,
    current_user: CurrentUserDep,
    ledger: RatingLedgerDep,
) -> MyRatingResponse:
    """Get the caller's rating of a specific user."""
    rating = ledger.find(current_user.id, user_id)
    if rating is None:
        return MyRatingResponse(has_rated=False, rating=None)
    return MyRatingResponse(has_rated=True, rating=UserRatingResponse.model_validate(rating))


@router.get("/{user_id}/comments", response_model=UserCommentsResponse)
async def list_user_comments(
    user_id: int,
    db: SessionDep,
    service: CommentServiceDep,
    viewer: OptionalUserDep,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> UserCommentsResponse:
    """List a user's comments; pending and rejected ones only for the author."""
    require_user(db, user_id)
    if viewer is not None and viewer.id == user_id:
        comments = service.list_by_author(user_id, limit=limit, offset=offset)
    else:
        comments = service.list_public_by_author(user_id, limit=limit, offset=offset)

    return UserCommentsResponse(
        user_id=user_id,
        comments=[CommentResponse.model_validate(comment) for comment in comments],
        pagination=Pagination.for_page(comments, limit, offset),
    )
