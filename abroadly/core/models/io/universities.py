"""
University I/O models for API responses.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field

from abroadly.core.database.entities import UniversitySource, UniversityType

from .common import CamelModel, PagePagination


class UniversityRead(CamelModel):
    """Schema for reading a university from the catalogue."""

    id: UUID
    name: str
    location: str
    country: str
    ranking: int
    student_count: int
    established_year: int
    type: UniversityType
    tuition_range: str
    acceptance_rate: Decimal = Field(description="Acceptance rate in percent, two decimals")
    description: str
    website: str
    image_url: Optional[str] = None
    specialties: List[str] = Field(default_factory=list)
    campus_size: Optional[str] = None
    room_board_cost: Optional[str] = None
    books_supplies_cost: Optional[str] = None
    personal_expenses_cost: Optional[str] = None
    facilities_info: Dict[str, Any] = Field(default_factory=dict)
    housing_options: List[Any] = Field(default_factory=list)
    student_organizations: List[Any] = Field(default_factory=list)
    dining_options: List[Any] = Field(default_factory=list)
    transportation_info: List[Any] = Field(default_factory=list)
    source: UniversitySource = UniversitySource.MANUAL
    created_at: datetime
    updated_at: datetime


class UniversityListResponse(CamelModel):
    """One page of universities."""

    universities: List[UniversityRead]
    pagination: PagePagination


class UniversityResponse(CamelModel):
    university: UniversityRead
