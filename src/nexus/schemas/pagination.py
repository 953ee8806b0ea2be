"""Pagination schemas for offset-based pagination."""

from pydantic import BaseModel, Field


class OffsetPagination(BaseModel):
    """Page metadata for offset-based listings.

    ``limit`` echoes the requested limit; the page itself may be shorter when
    the server caps it. ``has_more`` is ``offset + limit < total``.
    """

    total: int = Field(description="Rows matching the filter, ignoring pagination.")
    limit: int
    offset: int
    has_more: bool

    @classmethod
    def build(cls, total: int, limit: int, offset: int) -> "OffsetPagination":
        return cls(total=total, limit=limit, offset=offset, has_more=offset + limit < total)
