"""
User and profile entity models.

This module contains the database entities for account data and the
academic profile attached to each account. A profile is optional and has a
strict one-to-one relationship with its user; the test score, award and
extracurricular collections are stored as JSON arrays on the profile row.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now
from ._types import TIMESTAMP, enum_column


class TargetLevel(str, Enum):
    """Degree level the student is aiming for."""

    UNDERGRADUATE = "undergraduate"
    MASTER = "master"
    PHD = "phd"
    EXCHANGE = "exchange"


class ScoreScale(str, Enum):
    """Scale used to express the academic score."""

    GPA4 = "gpa4"
    PERCENTAGE = "percentage"
    INDO = "indo"


class User(Base, table=True):
    """Registered account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=255, description="Display name")
    email: str = Field(max_length=255, unique=True, index=True, description="Login e-mail, unique")
    password: str = Field(max_length=255, description="bcrypt password hash")

    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"


class ProfileBase(Base):
    """Academic background fields of a profile."""

    date_of_birth: Optional[date] = Field(default=None, description="Date of birth")
    nationality: Optional[str] = Field(default="Indonesia", max_length=100, description="Nationality")
    target_level: Optional[TargetLevel] = Field(
        default=None, sa_type=enum_column(TargetLevel, "target_level"), description="Target degree level"
    )
    intended_major: Optional[str] = Field(default=None, max_length=255, description="Intended field of study")
    intended_country: Optional[str] = Field(default=None, max_length=100, description="Preferred study country")
    budget_min: Optional[int] = Field(default=None, description="Minimum yearly budget in USD")
    budget_max: Optional[int] = Field(default=None, description="Maximum yearly budget in USD")
    institution: Optional[str] = Field(default=None, max_length=255, description="Current or last institution")
    graduation_year: Optional[int] = Field(default=None, description="Graduation year")
    academic_score: Optional[str] = Field(default=None, max_length=10, description="GPA or percentage as text")
    score_scale: Optional[ScoreScale] = Field(
        default=ScoreScale.GPA4, sa_type=enum_column(ScoreScale, "score_scale"), description="Scale of academic score"
    )
    english_tests: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    standardized_tests: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    awards: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    extracurriculars: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)


class Profile(ProfileBase, table=True):
    """Academic profile of a user, at most one per user.

    Table: profiles
    """

    __tablename__ = "profiles"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", unique=True, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Profile(id={self.id}, user_id={self.user_id})"
