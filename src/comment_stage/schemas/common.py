"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON while using snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    """Offset pagination metadata returned by list endpoints."""

    limit: int
    offset: int
    has_more: bool = Field(..., description="True when the page was full")

    @classmethod
    def for_page(cls, items: list, limit: int, offset: int) -> Pagination:
        """Build pagination metadata for a page of ``items``."""
        return cls(limit=limit, offset=offset, has_more=len(items) == limit)


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
