"""
AI backed recommendation flows.

These services gather the context an AI operation needs from the database,
run it through :class:`AIService` and persist whatever the operation
produces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import Profile
from abroadly.core.database.repositories import (
    FavoriteRepository,
    ProfileRepository,
    ScholarshipFavoriteRepository,
    UniversityRepository,
)
from abroadly.core.logging_config import get_logger
from abroadly.core.models.io import UniversityRead

from .ai_service import AIService, MatchingResult, profile_to_prompt_dict

logger = get_logger(__name__)


class NoUniversitiesError(LookupError):
    """The catalogue is empty, so there is nothing to match against."""


@dataclass
class MatchOutcome:
    """Matches together with the suggested universities that were stored."""

    result: MatchingResult
    inserted: List[UniversityRead] = field(default_factory=list)


@dataclass
class TaskRecommendations:
    """Recommended tasks and the context they were generated from."""

    tasks: List[Dict[str, Any]]
    profile: Profile
    favorite_universities: List[str]
    favorite_scholarships: List[str]


class UniversityMatchingService:
    """Service that matches a profile against the catalogue."""

    def __init__(self, session: AsyncSession, ai_service: AIService):
        self.session = session
        self.ai_service = ai_service
        self.universities = UniversityRepository(session)

    async def match(self, profile: Mapping[str, Any]) -> MatchOutcome:
        """
        Match a profile and store the suggested universities.

        Args:
            profile: Student profile (camelCase keys)

        Returns:
            Matching result; ``inserted`` is empty when storing the
            suggestions failed

        Raises:
            NoUniversitiesError: When the catalogue is empty
        """
        universities = await self.universities.list_all()
        if not universities:
            raise NoUniversitiesError("No universities in the catalogue")

        result = await self.ai_service.match_universities(profile, universities)
        # storing suggestions may roll the session back and expire the matched rows
        for match in result.matches:
            match["university"] = UniversityRead.model_validate(match["university"])

        inserted: List[UniversityRead] = []
        if result.success and result.suggested_universities:
            try:
                inserted = await self.ai_service.insert_suggested_universities(
                    self.session, result.suggested_universities
                )
            except Exception as e:
                logger.error(f"Failed to insert suggested universities: {e}", exc_info=True)
        logger.info(f"Matched {len(result.matches)} universities, stored {len(inserted)} suggestions")
        return MatchOutcome(result=result, inserted=inserted)


class TaskRecommendationService:
    """Service that recommends application tasks for a user."""

    def __init__(self, session: AsyncSession, ai_service: AIService):
        self.ai_service = ai_service
        self.profiles = ProfileRepository(session)
        self.favorites = FavoriteRepository(session)
        self.scholarship_favorites = ScholarshipFavoriteRepository(session)

    async def recommend(self, user_id: int) -> TaskRecommendations:
        """
        Recommend tasks from the user's profile and favorites.

        Raises:
            HTTPException: 404 when the user has no profile yet
        """
        profile = await self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User profile not found. Please complete your profile first.",
            )

        universities = await self.favorites.list_university_names(user_id)
        scholarships = await self.scholarship_favorites.list_scholarship_names(user_id)
        tasks = await self.ai_service.generate_task_recommendations(
            profile_to_prompt_dict(profile), universities, scholarships
        )
        return TaskRecommendations(
            tasks=tasks,
            profile=profile,
            favorite_universities=universities,
            favorite_scholarships=scholarships,
        )
