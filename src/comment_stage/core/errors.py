"""Domain error taxonomy.

Every error carries the HTTP status the API layer reports and a message that
is safe to show to end users. Internal detail belongs in the log, never in
``message``.
"""

from __future__ import annotations

from fastapi import status


class CommentStageError(Exception):
    """Base class for errors raised by the comment and rating core."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CommentStageError):
    """Malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(CommentStageError):
    """The referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ForbiddenError(CommentStageError):
    """The caller lacks rights over the entity."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class SelfRatingError(CommentStageError):
    """A user tried to rate their own identity."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You cannot rate yourself"


class InvalidStateError(CommentStageError):
    """The operation is not legal in the entity's current lifecycle state."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Operation not allowed in the current state"


class DependencyUnavailable(CommentStageError):
    """The moderation oracle could not be reached or its answer was unusable.

    Absorbed by the comment lifecycle (fail-open), so it never reaches clients.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Moderation service unavailable"


class StorageError(CommentStageError):
    """The persistence layer failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


__all__ = [
    "CommentStageError",
    "DependencyUnavailable",
    "ForbiddenError",
    "InvalidStateError",
    "NotFoundError",
    "SelfRatingError",
    "StorageError",
    "ValidationError",
]
