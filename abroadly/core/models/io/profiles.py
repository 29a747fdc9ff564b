"""
Profile and favorite I/O models for API requests and responses.

This module contains the schemas used by the ``/user`` endpoints: the
academic profile, basic account information, and the favorite universities
and scholarships of the caller.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from abroadly.core.database.entities import ScoreScale, TargetLevel

from .auth import UserSummary
from .common import CamelModel
from .universities import UniversityRead


class ProfileUpdate(CamelModel):
    """Schema for creating or updating the academic profile."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    date_of_birth: Optional[date] = None
    nationality: Optional[str] = None
    target_level: Optional[TargetLevel] = None
    intended_major: Optional[str] = None
    intended_country: Optional[str] = None
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    institution: Optional[str] = None
    graduation_year: Optional[int] = None
    academic_score: Optional[str] = None
    score_scale: Optional[ScoreScale] = None
    english_tests: Optional[List[Dict[str, Any]]] = None
    standardized_tests: Optional[List[Dict[str, Any]]] = None
    awards: Optional[List[Dict[str, Any]]] = None
    extracurriculars: Optional[List[Dict[str, Any]]] = None

    @field_validator(
        "date_of_birth", "target_level", "score_scale", "budget_min", "budget_max", "graduation_year", mode="before"
    )
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        # Form inputs submit empty strings for untouched fields
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProfileRead(CamelModel):
    """Schema for reading the academic profile."""

    id: int
    user_id: int
    date_of_birth: Optional[date] = None
    nationality: Optional[str] = None
    target_level: Optional[TargetLevel] = None
    intended_major: Optional[str] = None
    intended_country: Optional[str] = None
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    institution: Optional[str] = None
    graduation_year: Optional[int] = None
    academic_score: Optional[str] = None
    score_scale: Optional[ScoreScale] = None
    english_tests: List[Dict[str, Any]] = Field(default_factory=list)
    standardized_tests: List[Dict[str, Any]] = Field(default_factory=list)
    awards: List[Dict[str, Any]] = Field(default_factory=list)
    extracurriculars: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class AccountRead(CamelModel):
    """Account fields shown next to the profile."""

    id: int
    full_name: str
    email: str
    created_at: datetime


class ProfileResponse(CamelModel):
    """Account together with its profile, if one was saved."""

    user: AccountRead
    profile: Optional[ProfileRead] = None


class ProfileUpdatedResponse(CamelModel):
    message: str
    profile: ProfileRead


class UserInfoUpdate(CamelModel):
    """Schema for renaming the account."""

    full_name: Optional[str] = None


class UserInfoResponse(CamelModel):
    message: str
    user: UserSummary


class FavoriteRead(CamelModel):
    """Favorite university join row."""

    id: UUID
    user_id: int
    university_id: UUID
    created_at: datetime


class FavoriteWithUniversity(CamelModel):
    """Favorite row expanded with its university."""

    id: UUID
    university: UniversityRead
    created_at: datetime


class FavoriteAddedResponse(CamelModel):
    message: str
    favorite: FavoriteRead


class ScholarshipFavoriteRead(CamelModel):
    """Favorite scholarship join row."""

    id: UUID
    user_id: int
    scholarship_id: UUID
    created_at: datetime


class ScholarshipFavoriteAddedResponse(CamelModel):
    message: str
    favorite: ScholarshipFavoriteRead


class FavoriteCheckResponse(CamelModel):
    is_favorite: bool


class SuggestedUniversityPayload(CamelModel):
    """University data sent along when favoriting an AI-suggested university."""

    name: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    ranking: Optional[int] = None
    student_count: Optional[int] = None
    established_year: Optional[int] = None
    type: Optional[str] = None
    tuition_range: Optional[str] = None
    acceptance_rate: Optional[Any] = None
    description: Optional[str] = None
    website: Optional[str] = None
    image_url: Optional[str] = None
    specialties: Optional[List[str]] = None
    campus_size: Optional[str] = None
    room_board_cost: Optional[str] = None
    books_supplies_cost: Optional[str] = None
    personal_expenses_cost: Optional[str] = None
    facilities_info: Optional[Dict[str, Any]] = None
    housing_options: Optional[List[Any]] = None
    student_organizations: Optional[List[Any]] = None
    dining_options: Optional[List[Any]] = None
    transportation_info: Optional[List[Any]] = None

