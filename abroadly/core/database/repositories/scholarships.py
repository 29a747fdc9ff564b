"""
Scholarship repository.

This module provides data access operations for the scholarship catalogue.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.scholarships import Scholarship, ScholarshipType
from .base import AsyncBaseRepository, QueryBuilder


class ScholarshipRepository(AsyncBaseRepository[Scholarship]):
    """Repository for scholarship data access operations using SQLModel."""

    uuid_pk = True

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Scholarship)

    async def search(
        self,
        limit: int,
        offset: int,
        type: Optional[ScholarshipType] = None,
        country: Optional[str] = None,
    ) -> Tuple[List[Scholarship], int]:
        """Page through scholarships filtered by type and country.

        Returns:
            Tuple of (page of scholarships, total matching rows)
        """
        stmt = QueryBuilder.apply_filters(select(Scholarship), Scholarship, {"type": type, "country": country})
        stmt = stmt.order_by(Scholarship.name)
        return await self._page(stmt, limit, offset)

    async def find_by_name_and_provider(self, name: str, provider: str) -> Optional[Scholarship]:
        """Get the scholarship with this name from this provider."""
        stmt = select(Scholarship).where(Scholarship.name == name, Scholarship.provider == provider).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_country(self, country: str, limit: int) -> List[Scholarship]:
        """Get up to ``limit`` scholarships offered in a country."""
        stmt = select(Scholarship).where(Scholarship.country == country).order_by(Scholarship.name).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
