"""
Services for browsing the university and scholarship catalogue.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import Scholarship, ScholarshipType, University
from abroadly.core.database.repositories import ScholarshipRepository, UniversityFilters, UniversityRepository
from abroadly.core.logging_config import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100


def _check_limit(limit: int) -> None:
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Limit must be between 1 and 100")


class UniversityService:
    """Service for searching and reading universities."""

    def __init__(self, session: AsyncSession):
        """Initialize university service with database session."""
        self.universities = UniversityRepository(session)

    async def search(self, filters: UniversityFilters, limit: int, offset: int) -> Tuple[List[University], int]:
        """
        Search the catalogue.

        Args:
            filters: Search criteria
            limit: Page size, 1 to 100
            offset: Rows to skip

        Returns:
            Tuple of (page of universities, total matching rows)

        Raises:
            HTTPException: 400 on an invalid page size or ranking range
        """
        _check_limit(limit)
        if offset < 0:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Offset must be at least 0")
        if (
            filters.min_ranking is not None
            and filters.max_ranking is not None
            and filters.min_ranking > filters.max_ranking
        ):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Minimum ranking cannot be greater than maximum ranking",
            )
        universities, total = await self.universities.search(filters, limit, offset)
        logger.debug(f"University search matched {total} rows")
        return universities, total

    async def get(self, university_id: str) -> University:
        university = await self.universities.get_by_id(university_id)
        if university is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="University not found")
        return university

    async def get_scholarships(self, university_id: str) -> List[Scholarship]:
        """Scholarships offered at a university; 404 when the university is unknown."""
        university = await self.get(university_id)
        return await self.universities.get_scholarships(university.id)


class ScholarshipService:
    """Service for listing and reading scholarships."""

    def __init__(self, session: AsyncSession):
        """Initialize scholarship service with database session."""
        self.scholarships = ScholarshipRepository(session)

    async def list(
        self,
        limit: int,
        offset: int,
        type: Optional[ScholarshipType] = None,
        country: Optional[str] = None,
    ) -> Tuple[List[Scholarship], int]:
        """
        Page through scholarships, ordered by name.

        Raises:
            HTTPException: 400 on an invalid page size or offset
        """
        if offset < 0:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Offset must be at least 0")
        _check_limit(limit)
        return await self.scholarships.search(limit, offset, type=type, country=country)

    async def get(self, scholarship_id: str) -> Scholarship:
        scholarship = await self.scholarships.get_by_id(scholarship_id)
        if scholarship is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scholarship not found")
        return scholarship
