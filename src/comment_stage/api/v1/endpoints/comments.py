# src/comment_stage/api/v1/endpoints/comments.py
"""Comment-related endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from comment_stage.models import COMMENT_STATUS_APPROVED, Comment
from comment_stage.schemas.comment import (
    CommentCreate,
    CommentEnvelope,
    CommentListResponse,
    CommentResponse,
    CommentStatsBody,
    CommentStatsResponse,
    ModerationSummary,
    RatingUpdate,
    SubmissionResponse,
)
from comment_stage.schemas.common import MessageResponse, Pagination

from ..dependencies import AggregatorDep, CommentServiceDep, CurrentUserDep

router = APIRouter(prefix="/comments", tags=["comments"])


def _comment_page(comments: list[Comment], limit: int, offset: int) -> CommentListResponse:
    return CommentListResponse(
        comments=[CommentResponse.model_validate(comment) for comment in comments],
        pagination=Pagination.for_page(comments, limit, offset),
    )


@router.get("", response_model=CommentListResponse)
async def list_comments(
    service: CommentServiceDep,
    site_section: str = Query("general", alias="siteSection", max_length=100),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of comments to return"),
    offset: int = Query(0, ge=0),
) -> CommentListResponse:
    """List approved comments of a site section, newest first."""
    comments = service.list_by_section(site_section, limit=limit, offset=offset)
    return _comment_page(comments, limit, offset)


@router.get("/stats", response_model=CommentStatsResponse)
async def get_comment_stats(
    aggregator: AggregatorDep,
    site_section: str | None = Query(None, alias="siteSection", max_length=100),
) -> CommentStatsResponse:
    """Return comment totals for one section, or globally when none is given."""
    stats = aggregator.comment_stats(site_section)
    return CommentStatsResponse(
        site_section=site_section,
        stats=CommentStatsBody.model_validate(stats),
    )


@router.get("/my-comments", response_model=CommentListResponse)
async def list_my_comments(
    service: CommentServiceDep,
    current_user: CurrentUserDep,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> CommentListResponse:
    """List the caller's own comments in every status."""
    comments = service.list_by_author(current_user.id, limit=limit, offset=offset)
    return _comment_page(comments, limit, offset)


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_comment(
    payload: CommentCreate,
    service: CommentServiceDep,
    current_user: CurrentUserDep,
) -> SubmissionResponse:
    """Submit a comment; it is moderated before this call returns."""
    submission = await service.submit(current_user.id, payload.content, payload.site_section)
    comment = submission.comment
    return SubmissionResponse(
        status=comment.status,
        comment=CommentResponse.model_validate(comment),
        moderation=ModerationSummary(
            approved=comment.status == COMMENT_STATUS_APPROVED,
            suggested_rating=comment.ai_suggested_rating,
            reason=comment.rejection_reason,
            feedback=submission.feedback,
            available=submission.moderation_available,
        ),
    )


@router.put("/{comment_id}/rating", response_model=CommentEnvelope)
async def confirm_comment_rating(
    comment_id: int,
    payload: RatingUpdate,
    service: CommentServiceDep,
    current_user: CurrentUserDep,
) -> CommentEnvelope:
    """Confirm or override the AI-suggested rating of the caller's comment."""
    comment = service.confirm_rating(comment_id, current_user.id, payload.rating)
    return CommentEnvelope(comment=CommentResponse.model_validate(comment))


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    service: CommentServiceDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    """Delete one of the caller's comments."""
    if not service.delete(comment_id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found or not authorized",
        )
    return MessageResponse(message="Comment deleted successfully")
