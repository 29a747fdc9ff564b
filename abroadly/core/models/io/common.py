"""
Shared building blocks for API I/O schemas.

All request and response bodies exchanged with the web client use camelCase
keys, while the Python side keeps snake_case attribute names. ``CamelModel``
bridges the two: it reads ORM entities through ``from_attributes``, accepts
either spelling on input and is serialized by alias in responses.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field aliases."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(CamelModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Error body returned for every handled failure."""

    error: str = Field(description="Human readable error message")


class PagePagination(CamelModel):
    """Offset pagination metadata with page numbers."""

    total: int
    limit: int
    offset: int
    total_pages: int
    current_page: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, total: int, limit: int, offset: int) -> "PagePagination":
        """Derive page numbers from an offset window.

        Args:
            total: Total number of matching rows
            limit: Page size
            offset: Rows skipped

        Returns:
            Pagination metadata
        """
        total_pages = math.ceil(total / limit) if limit else 0
        current_page = offset // limit + 1 if limit else 1
        return cls(
            total=total,
            limit=limit,
            offset=offset,
            total_pages=total_pages,
            current_page=current_page,
            has_next=current_page < total_pages,
            has_prev=current_page > 1,
        )


class OffsetPagination(CamelModel):
    """Offset pagination metadata without page numbers."""

    total: int
    limit: int
    offset: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, total: int, limit: int, offset: int) -> "OffsetPagination":
        return cls(
            total=total,
            limit=limit,
            offset=offset,
            has_next=offset + limit < total,
            has_prev=offset > 0,
        )


class AIEnvelope(CamelModel):
    """``{success, data, message}`` envelope used by the AI endpoints."""

    success: bool = True
    message: Optional[str] = None
