"""
Scholarship I/O models for API responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from abroadly.core.database.entities import ScholarshipType

from .common import CamelModel, OffsetPagination


class ScholarshipRead(CamelModel):
    """Schema for reading a scholarship from the catalogue."""

    id: UUID
    name: str
    type: ScholarshipType
    amount: str
    description: str
    requirements: List[str] = Field(default_factory=list)
    deadline: str
    provider: str
    country: str
    application_url: Optional[str] = None
    eligible_programs: List[str] = Field(default_factory=list)
    max_recipients: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ScholarshipListResponse(CamelModel):
    """One page of scholarships."""

    scholarships: List[ScholarshipRead]
    pagination: OffsetPagination


class ScholarshipResponse(CamelModel):
    scholarship: ScholarshipRead


class ScholarshipsResponse(CamelModel):
    """Scholarships offered at one university."""

    scholarships: List[ScholarshipRead]
