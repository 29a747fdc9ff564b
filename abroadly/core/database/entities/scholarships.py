"""
Scholarship entity models.

This module contains the scholarship catalogue entity and the join table
recording which scholarships a user has saved as favorite.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now
from ._types import TIMESTAMP, enum_column


class ScholarshipType(str, Enum):
    """Funding coverage of a scholarship."""

    FULLY_FUNDED = "fully-funded"
    PARTIALLY_FUNDED = "partially-funded"
    TUITION_ONLY = "tuition-only"


class Scholarship(Base, table=True):
    """Scholarship in the browsable catalogue.

    Table: scholarships
    """

    __tablename__ = "scholarships"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    name: str = Field(max_length=255, index=True)
    type: ScholarshipType = Field(sa_type=enum_column(ScholarshipType, "scholarship_type"))
    amount: str = Field(max_length=255, description="Human readable award amount")
    description: str
    requirements: List[str] = Field(default_factory=list, sa_type=JSON)
    deadline: str = Field(max_length=100, description="Application deadline as text")
    provider: str = Field(max_length=255)
    country: str = Field(max_length=100, index=True)
    application_url: Optional[str] = Field(default=None, max_length=500)
    eligible_programs: List[str] = Field(default_factory=list, sa_type=JSON)
    max_recipients: Optional[int] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Scholarship(id={self.id}, name={self.name}, provider={self.provider})"


class UserScholarshipFavorite(Base, table=True):
    """Scholarship saved by a user.

    Table: user_scholarship_favorites
    """

    __tablename__ = "user_scholarship_favorites"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    scholarship_id: uuid.UUID = Field(foreign_key="scholarships.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
