# src/comment_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "comments_router",
    "users_router",
]
