# src/comment_stage/api/v1/endpoints/auth.py
"""Authentication endpoints.

The OAuth handshake lives with the identity provider integration; this router
only exposes the account behind a bearer token.
"""

from fastapi import APIRouter

from comment_stage.schemas.user import UserResponse

from ..dependencies import CurrentUserDep

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep) -> UserResponse:
    """Return the authenticated user's account."""
    return UserResponse.model_validate(current_user)
