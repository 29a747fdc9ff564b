"""
University entity models.

This module contains the university catalogue entity together with the two
join tables that hang off it: the scholarships offered by a university and
the universities a user has marked as favorite.

Universities are either curated (``source=manual``) or created from AI
suggestions during matching (``source=ai_suggested``).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import Numeric
from sqlmodel import JSON, Field

from ..base import Base, utc_now
from ._types import TIMESTAMP, enum_column


class UniversityType(str, Enum):
    """Funding model of a university."""

    PUBLIC = "public"
    PRIVATE = "private"


class UniversitySource(str, Enum):
    """Origin of a university record."""

    MANUAL = "manual"
    AI_SUGGESTED = "ai_suggested"


class University(Base, table=True):
    """University in the browsable catalogue.

    Table: universities
    """

    __tablename__ = "universities"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    name: str = Field(max_length=255, index=True, description="University name")
    location: str = Field(max_length=255, description="City / region")
    country: str = Field(max_length=100, index=True, description="Country")
    ranking: int = Field(description="World ranking")
    student_count: int = Field(description="Number of enrolled students")
    established_year: int = Field(description="Founding year")
    type: UniversityType = Field(sa_type=enum_column(UniversityType, "university_type"))
    tuition_range: str = Field(max_length=100, description="Human readable tuition range")
    acceptance_rate: Decimal = Field(sa_type=Numeric(5, 2), description="Acceptance rate in percent")
    description: str = Field(description="Free text description")
    website: str = Field(max_length=255)
    image_url: Optional[str] = Field(default=None, max_length=500)
    specialties: List[str] = Field(default_factory=list, sa_type=JSON)

    campus_size: Optional[str] = Field(default=None, max_length=100)
    room_board_cost: Optional[str] = Field(default=None, max_length=100)
    books_supplies_cost: Optional[str] = Field(default=None, max_length=100)
    personal_expenses_cost: Optional[str] = Field(default=None, max_length=100)
    facilities_info: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    housing_options: List[Any] = Field(default_factory=list, sa_type=JSON)
    student_organizations: List[Any] = Field(default_factory=list, sa_type=JSON)
    dining_options: List[Any] = Field(default_factory=list, sa_type=JSON)
    transportation_info: List[Any] = Field(default_factory=list, sa_type=JSON)

    source: UniversitySource = Field(
        default=UniversitySource.MANUAL, sa_type=enum_column(UniversitySource, "university_source")
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"University(id={self.id}, name={self.name}, country={self.country})"


class UniversityScholarship(Base, table=True):
    """Scholarship offered at a university (many-to-many).

    Table: university_scholarships
    """

    __tablename__ = "university_scholarships"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    university_id: uuid.UUID = Field(foreign_key="universities.id", ondelete="CASCADE", index=True)
    scholarship_id: uuid.UUID = Field(foreign_key="scholarships.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)


class UserFavorite(Base, table=True):
    """University saved by a user.

    Table: user_favorites
    """

    __tablename__ = "user_favorites"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    university_id: uuid.UUID = Field(foreign_key="universities.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
