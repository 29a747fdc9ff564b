"""
Service for favorite universities and scholarships.

Universities suggested by the matching flow reach the client before they
have a catalogue id. The client refers to them as ``ai-suggested-<slug>``,
where the slug is the university name with spaces replaced by dashes.
Favoriting such an id creates the university (or reuses one with the same
name); removing and checking resolve the slug back to a catalogue row.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import (
    Scholarship,
    University,
    UniversitySource,
    UniversityType,
    UserFavorite,
    UserScholarshipFavorite,
)
from abroadly.core.database.repositories import (
    FavoriteRepository,
    ScholarshipFavoriteRepository,
    ScholarshipRepository,
    UniversityRepository,
)
from abroadly.core.logging_config import get_logger
from abroadly.core.models.io import SuggestedUniversityPayload

logger = get_logger(__name__)

AI_SUGGESTED_PREFIX = "ai-suggested-"


def is_ai_suggested_id(university_id: str) -> bool:
    return university_id.startswith(AI_SUGGESTED_PREFIX)


def name_from_suggested_id(university_id: str) -> str:
    """Turn ``ai-suggested-Some-University`` into ``some university``."""
    return university_id[len(AI_SUGGESTED_PREFIX) :].replace("-", " ").lower()


def _clean_name(name: str) -> str:
    cleaned = re.sub(r"[^\w\s]", "", name.lower())
    return re.sub(r"\s+", " ", cleaned).strip()


def find_by_exact_name(universities: Sequence[University], name: str) -> Optional[University]:
    """First university whose lower-cased name equals ``name``."""
    return next((u for u in universities if u.name.lower() == name), None)


def find_by_fuzzy_name(universities: Sequence[University], name: str) -> Optional[University]:
    """
    First university whose cleaned name equals, contains or is contained in ``name``.

    Both sides are lower-cased with punctuation removed and whitespace collapsed.
    """
    wanted = _clean_name(name)
    for university in universities:
        candidate = _clean_name(university.name)
        if candidate == wanted or wanted in candidate or candidate in wanted:
            return university
    return None


def university_from_payload(payload: SuggestedUniversityPayload) -> University:
    """Build a catalogue row from the data the client sends for a suggested university."""
    return University(
        name=payload.name,
        location=payload.location or "",
        country=payload.country or "",
        ranking=payload.ranking or 0,
        student_count=payload.student_count or 0,
        established_year=payload.established_year or 0,
        type=UniversityType.PRIVATE if payload.type == UniversityType.PRIVATE.value else UniversityType.PUBLIC,
        tuition_range=payload.tuition_range or "Not specified",
        acceptance_rate=Decimal(str(payload.acceptance_rate or "0.00").replace("%", "").strip()),
        description=payload.description or "",
        website=payload.website or "",
        image_url=payload.image_url,
        specialties=payload.specialties or [],
        campus_size=payload.campus_size,
        room_board_cost=payload.room_board_cost,
        books_supplies_cost=payload.books_supplies_cost,
        personal_expenses_cost=payload.personal_expenses_cost,
        facilities_info=payload.facilities_info or {},
        housing_options=payload.housing_options or [],
        student_organizations=payload.student_organizations or [],
        dining_options=payload.dining_options or [],
        transportation_info=payload.transportation_info or [],
        source=UniversitySource.AI_SUGGESTED,
    )


class FavoriteService:
    """Service for the favorite universities and scholarships of a user."""

    def __init__(self, session: AsyncSession):
        """Initialize favorite service with database session."""
        self.universities = UniversityRepository(session)
        self.scholarships = ScholarshipRepository(session)
        self.favorites = FavoriteRepository(session)
        self.scholarship_favorites = ScholarshipFavoriteRepository(session)

    # --- universities ---

    async def list_universities(self, user_id: int) -> List[Tuple[UserFavorite, University]]:
        return await self.favorites.list_with_universities(user_id)

    async def add_university(
        self, user_id: int, university_id: str, payload: Optional[SuggestedUniversityPayload] = None
    ) -> UserFavorite:
        """
        Save a university as favorite.

        Args:
            user_id: Owning user ID
            university_id: Catalogue id, or an ``ai-suggested-`` id
            payload: University data, required for ``ai-suggested-`` ids

        Returns:
            Created favorite row

        Raises:
            HTTPException: 400 on missing suggestion data, 404 for unknown
                universities, 409 when already saved
        """
        if is_ai_suggested_id(university_id):
            university = await self._resolve_or_create_suggested(payload)
        else:
            university = await self.universities.get_by_id(university_id)
            if university is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="University not found")

        if await self.favorites.get(user_id, university.id) is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="University already in favorites")

        favorite = await self.favorites.add(user_id, university.id)
        logger.info(f"User {user_id} saved university {university.id}")
        return favorite

    async def _resolve_or_create_suggested(self, payload: Optional[SuggestedUniversityPayload]) -> University:
        if payload is None or not payload.name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid university data for AI-suggested university",
            )
        existing = await self.universities.find_by_name(payload.name)
        if existing is not None:
            return existing
        try:
            university = university_from_payload(payload)
        except (ArithmeticError, ValueError) as e:
            logger.warning(f"Rejected suggested university payload: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid university data for AI-suggested university",
            )
        university = await self.universities.create(university)
        logger.info(f"Created AI suggested university {university.name} from favorite request")
        return university

    async def remove_university(self, user_id: int, university_id: str) -> None:
        """
        Remove a university from the favorites.

        Raises:
            HTTPException: 404 when the suggested university cannot be resolved
                or the university is not saved
        """
        if is_ai_suggested_id(university_id):
            university = find_by_exact_name(
                await self.universities.list_all(), name_from_suggested_id(university_id)
            )
            if university is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="AI-suggested university not found")
            university_id = str(university.id)

        if not await self.favorites.remove(user_id, university_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="University not in favorites")
        logger.info(f"User {user_id} removed university {university_id}")

    async def is_university_favorite(self, user_id: int, university_id: str) -> bool:
        """
        Check whether a university is saved.

        Raises:
            HTTPException: 404 when a suggested id matches no university
        """
        if is_ai_suggested_id(university_id):
            university = find_by_fuzzy_name(
                await self.universities.list_all(), name_from_suggested_id(university_id)
            )
            if university is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="AI-suggested university not found")
            university_id = str(university.id)
        return await self.favorites.get(user_id, university_id) is not None

    # --- scholarships ---

    async def list_scholarships(self, user_id: int) -> List[Scholarship]:
        return [scholarship for _, scholarship in await self.scholarship_favorites.list_with_scholarships(user_id)]

    async def add_scholarship(self, user_id: int, scholarship_id: str) -> UserScholarshipFavorite:
        """
        Save a scholarship as favorite.

        Raises:
            HTTPException: 404 for unknown scholarships, 409 when already saved
        """
        scholarship = await self.scholarships.get_by_id(scholarship_id)
        if scholarship is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scholarship not found")
        if await self.scholarship_favorites.get(user_id, scholarship.id) is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Scholarship already in favorites")
        favorite = await self.scholarship_favorites.add(user_id, scholarship.id)
        logger.info(f"User {user_id} saved scholarship {scholarship.id}")
        return favorite

    async def remove_scholarship(self, user_id: int, scholarship_id: str) -> None:
        if not await self.scholarship_favorites.remove(user_id, scholarship_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scholarship not in favorites")
        logger.info(f"User {user_id} removed scholarship {scholarship_id}")

    async def is_scholarship_favorite(self, user_id: int, scholarship_id: str) -> bool:
        return await self.scholarship_favorites.get(user_id, scholarship_id) is not None
