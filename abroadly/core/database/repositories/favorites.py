"""
Favorite repositories.

This module provides data access operations for the two favorite join
tables: universities and scholarships saved by a user. Listing returns the
join row together with the catalogue entity it points at.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.scholarships import Scholarship, UserScholarshipFavorite
from ..entities.universities import University, UserFavorite
from .base import AsyncBaseRepository, parse_uuid


class FavoriteRepository(AsyncBaseRepository[UserFavorite]):
    """Repository for favorite universities of a user."""

    uuid_pk = True

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserFavorite)

    async def list_with_universities(self, user_id: int) -> List[Tuple[UserFavorite, University]]:
        """Get the favorite rows of a user joined with their universities, oldest first.

        Args:
            user_id: Owning user ID

        Returns:
            List of (favorite, university) pairs
        """
        stmt = (
            select(UserFavorite, University)
            .join(University, University.id == UserFavorite.university_id)
            .where(UserFavorite.user_id == user_id)
            .order_by(UserFavorite.created_at)
        )
        result = await self.session.execute(stmt)
        return [(favorite, university) for favorite, university in result.all()]

    async def list_university_names(self, user_id: int) -> List[str]:
        """Get the names of the universities a user has saved."""
        return [university.name for _, university in await self.list_with_universities(user_id)]

    async def get(self, user_id: int, university_id: Any) -> Optional[UserFavorite]:
        """Get the favorite row for a user and university, if any."""
        uid = parse_uuid(university_id)
        if uid is None:
            return None
        stmt = select(UserFavorite).where(UserFavorite.user_id == user_id, UserFavorite.university_id == uid)
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def add(self, user_id: int, university_id: Any) -> UserFavorite:
        """Save a university as favorite."""
        return await self.create(UserFavorite(user_id=user_id, university_id=parse_uuid(university_id)))

    async def remove(self, user_id: int, university_id: Any) -> bool:
        """Remove a university from the favorites of a user.

        Returns:
            True if a favorite was removed, False if there was none
        """
        favorite = await self.get(user_id, university_id)
        if favorite is None:
            return False
        await self.session.delete(favorite)
        await self.session.commit()
        return True


class ScholarshipFavoriteRepository(AsyncBaseRepository[UserScholarshipFavorite]):
    """Repository for favorite scholarships of a user."""

    uuid_pk = True

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserScholarshipFavorite)

    async def list_with_scholarships(self, user_id: int) -> List[Tuple[UserScholarshipFavorite, Scholarship]]:
        """Get the favorite rows of a user joined with their scholarships, oldest first."""
        stmt = (
            select(UserScholarshipFavorite, Scholarship)
            .join(Scholarship, Scholarship.id == UserScholarshipFavorite.scholarship_id)
            .where(UserScholarshipFavorite.user_id == user_id)
            .order_by(UserScholarshipFavorite.created_at)
        )
        result = await self.session.execute(stmt)
        return [(favorite, scholarship) for favorite, scholarship in result.all()]

    async def list_scholarship_names(self, user_id: int) -> List[str]:
        """Get the names of the scholarships a user has saved."""
        return [scholarship.name for _, scholarship in await self.list_with_scholarships(user_id)]

    async def get(self, user_id: int, scholarship_id: Any) -> Optional[UserScholarshipFavorite]:
        sid = parse_uuid(scholarship_id)
        if sid is None:
            return None
        stmt = select(UserScholarshipFavorite).where(
            UserScholarshipFavorite.user_id == user_id,
            UserScholarshipFavorite.scholarship_id == sid,
        )
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def add(self, user_id: int, scholarship_id: Any) -> UserScholarshipFavorite:
        return await self.create(
            UserScholarshipFavorite(user_id=user_id, scholarship_id=parse_uuid(scholarship_id))
        )

    async def remove(self, user_id: int, scholarship_id: Any) -> bool:
        favorite = await self.get(user_id, scholarship_id)
        if favorite is None:
            return False
        await self.session.delete(favorite)
        await self.session.commit()
        return True
