"""
Service for the academic profile and account information.

``PUT /user/profile`` replaces the whole profile: fields missing from the
body are cleared, except that nationality falls back to Indonesia and the
enumerated fields keep their stored (or default) value.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import Profile, ScoreScale, User
from abroadly.core.database.repositories import ProfileRepository, UserRepository
from abroadly.core.logging_config import get_logger
from abroadly.core.models.io import ProfileUpdate

logger = get_logger(__name__)

DEFAULT_NATIONALITY = "Indonesia"
MIN_GRADUATION_YEAR = 1950
ACADEMIC_SCORE_MAX_LENGTH = 10
_LIST_FIELDS = ("english_tests", "standardized_tests", "awards", "extracurriculars")
_KEEP_WHEN_MISSING = ("target_level", "score_scale")


class ProfileValidationError(ValueError):
    """Profile data violates a business rule."""


def validate_profile(data: ProfileUpdate, today: Optional[date] = None) -> None:
    """
    Check the cross-field rules of a profile update.

    Args:
        data: Incoming profile
        today: Reference date for the graduation year upper bound

    Raises:
        ProfileValidationError: With a client-facing message
    """
    if data.budget_min is not None and data.budget_max is not None and data.budget_min > data.budget_max:
        raise ProfileValidationError("Minimum budget cannot be greater than maximum budget")

    if data.academic_score is not None and data.academic_score != "":
        if len(data.academic_score) > ACADEMIC_SCORE_MAX_LENGTH:
            raise ProfileValidationError(
                f"Academic score cannot be longer than {ACADEMIC_SCORE_MAX_LENGTH} characters"
            )
        try:
            score = float(data.academic_score)
        except ValueError:
            raise ProfileValidationError("Academic score must be a positive number")
        if math.isnan(score) or score < 0:
            raise ProfileValidationError("Academic score must be a positive number")
        if data.score_scale == ScoreScale.GPA4 and score > 4.0:
            raise ProfileValidationError("GPA on 4.0 scale cannot exceed 4.0")
        if data.score_scale == ScoreScale.PERCENTAGE and score > 100:
            raise ProfileValidationError("Percentage score cannot exceed 100")

    if data.graduation_year is not None:
        current_year = (today or date.today()).year
        if not MIN_GRADUATION_YEAR <= data.graduation_year <= current_year + 10:
            raise ProfileValidationError("Invalid graduation year")


class ProfileService:
    """Service for reading and updating a user's account and profile."""

    def __init__(self, session: AsyncSession):
        """Initialize profile service with database session."""
        self.users = UserRepository(session)
        self.profiles = ProfileRepository(session)

    async def get_profile(self, user_id: int) -> Tuple[Optional[User], Optional[Profile]]:
        """
        Get the account and its profile.

        Returns:
            Tuple of (user or None, profile or None)
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            return None, None
        return user, await self.profiles.get_by_user_id(user_id)

    async def upsert_profile(self, user_id: int, data: ProfileUpdate) -> Profile:
        """
        Create or replace the profile of a user.

        Raises:
            HTTPException: 400 when the data breaks a profile rule
        """
        try:
            validate_profile(data)
        except ProfileValidationError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        values: Dict[str, Any] = data.model_dump(by_alias=False)
        values["nationality"] = values.get("nationality") or DEFAULT_NATIONALITY
        for key in _LIST_FIELDS:
            values[key] = values.get(key) or []
        for key in _KEEP_WHEN_MISSING:
            if values.get(key) is None:
                values.pop(key)
        if values.get("academic_score") == "":
            values["academic_score"] = None

        profile = await self.profiles.upsert(user_id, values)
        logger.info(f"Saved profile for user {user_id}")
        return profile

    async def update_full_name(self, user_id: int, full_name: Optional[str], too_short_message: str) -> Optional[User]:
        """
        Rename the account.

        Args:
            user_id: User ID
            full_name: New display name, at least two characters once trimmed
            too_short_message: Localized error message for a short name

        Returns:
            Updated user, or None when the user does not exist

        Raises:
            HTTPException: 400 when the name is too short
        """
        if not full_name or len(full_name.strip()) < 2:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=too_short_message)
        return await self.users.update_full_name(user_id, full_name.strip())
