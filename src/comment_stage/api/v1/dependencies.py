"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from comment_stage.core.security import decode_access_token
from comment_stage.db.session import get_db
from comment_stage.models import User
from comment_stage.services.comments import CommentService
from comment_stage.services.moderation import ModerationOracle
from comment_stage.services.ratings import UserRatingLedger
from comment_stage.services.stats import RatingAggregator

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _resolve_user(token: str, db: Session) -> User:
    user_id = decode_access_token(token)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    The identity provider is trusted unconditionally; the core only maps the
    token subject onto a stored user.

    Raises:
        HTTPException: If the token is invalid or the user no longer exists.
    """
    return _resolve_user(credentials.credentials, db)


def get_optional_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)
    ],
    db: SessionDep,
) -> User | None:
    """Return the authenticated user when a bearer token is supplied."""
    if credentials is None:
        return None
    return _resolve_user(credentials.credentials, db)


def get_moderation_oracle(request: Request) -> ModerationOracle:
    """Return the process-wide moderation oracle created at startup."""
    return request.app.state.moderation_oracle


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
OracleDep = Annotated[ModerationOracle, Depends(get_moderation_oracle)]


def get_comment_service(db: SessionDep, oracle: OracleDep) -> CommentService:
    """Build the request-scoped comment lifecycle service."""
    return CommentService(db, oracle)


def get_rating_ledger(db: SessionDep) -> UserRatingLedger:
    """Build the request-scoped user rating ledger."""
    return UserRatingLedger(db)


def get_rating_aggregator(db: SessionDep) -> RatingAggregator:
    """Build the request-scoped statistics aggregator."""
    return RatingAggregator(db)


CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
RatingLedgerDep = Annotated[UserRatingLedger, Depends(get_rating_ledger)]
AggregatorDep = Annotated[RatingAggregator, Depends(get_rating_aggregator)]
