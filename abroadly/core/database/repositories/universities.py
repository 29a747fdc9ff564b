"""
University repository.

This module provides data access operations for the university catalogue:
filtered and paginated search, lookups by name, and the scholarship links
stored in ``university_scholarships``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.scholarships import Scholarship
from ..entities.universities import University, UniversityScholarship, UniversityType
from .base import AsyncBaseRepository, QueryBuilder, parse_uuid


@dataclass(frozen=True)
class UniversityFilters:
    """Search criteria for the university catalogue."""

    search: Optional[str] = None
    country: Optional[str] = None
    type: Optional[UniversityType] = None
    min_ranking: Optional[int] = None
    max_ranking: Optional[int] = None
    min_acceptance_rate: Optional[Decimal] = None
    max_acceptance_rate: Optional[Decimal] = None


class UniversityRepository(AsyncBaseRepository[University]):
    """Repository for university data access operations using SQLModel."""

    uuid_pk = True

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async session for database operations
        """
        super().__init__(session, University)

    async def search(
        self, filters: UniversityFilters, limit: int, offset: int
    ) -> Tuple[List[University], int]:
        """Search universities, ordered by ranking.

        Args:
            filters: Search criteria; unset criteria are ignored
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (page of universities, total matching rows)
        """
        stmt = QueryBuilder.apply_contains(select(University), University.name, filters.search)
        stmt = QueryBuilder.apply_filters(stmt, University, {"country": filters.country, "type": filters.type})
        stmt = QueryBuilder.apply_range(stmt, University.ranking, filters.min_ranking, filters.max_ranking)
        stmt = QueryBuilder.apply_range(
            stmt, University.acceptance_rate, filters.min_acceptance_rate, filters.max_acceptance_rate
        )
        stmt = stmt.order_by(University.ranking, University.name)
        return await self._page(stmt, limit, offset)

    async def list_all(self) -> List[University]:
        """Get every university in the catalogue."""
        result = await self.session.execute(select(University).order_by(University.ranking))
        return list(result.scalars().all())

    async def find_by_name(self, name: str) -> Optional[University]:
        """Get the first university with exactly this name."""
        result = await self.session.execute(select(University).where(University.name == name).limit(1))
        return result.scalars().first()

    async def find_by_name_and_country(self, name: str, country: str) -> Optional[University]:
        """Get the university with this name in this country."""
        stmt = select(University).where(University.name == name, University.country == country).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_scholarships(self, university_id: Any) -> List[Scholarship]:
        """Get the scholarships linked to a university.

        Args:
            university_id: University ID

        Returns:
            Linked scholarships, empty when the id is unknown
        """
        uid = parse_uuid(university_id)
        if uid is None:
            return []
        stmt = (
            select(Scholarship)
            .join(UniversityScholarship, UniversityScholarship.scholarship_id == Scholarship.id)
            .where(UniversityScholarship.university_id == uid)
            .order_by(Scholarship.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def is_linked(self, university_id: Any, scholarship_id: Any) -> bool:
        """Check whether a scholarship is already linked to a university."""
        stmt = select(UniversityScholarship).where(
            UniversityScholarship.university_id == parse_uuid(university_id),
            UniversityScholarship.scholarship_id == parse_uuid(scholarship_id),
        )
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first() is not None

    async def link_scholarship(self, university_id: Any, scholarship_id: Any) -> Optional[UniversityScholarship]:
        """Link a scholarship to a university unless the link already exists.

        Returns:
            The new link, or None when it was already present
        """
        if await self.is_linked(university_id, scholarship_id):
            return None
        link = UniversityScholarship(
            university_id=parse_uuid(university_id),
            scholarship_id=parse_uuid(scholarship_id),
        )
        self.session.add(link)
        await self.session.commit()
        await self.session.refresh(link)
        return link
