"""
User and profile repositories.

This module provides data access operations for accounts and for the
one-to-one academic profile attached to each account.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.users import Profile, User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Repository for account data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async session for database operations
        """
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by e-mail address.

        Args:
            email: Login e-mail

        Returns:
            User instance or None
        """
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_full_name(self, user_id: int, full_name: str) -> Optional[User]:
        """Rename a user.

        Args:
            user_id: User ID
            full_name: New display name

        Returns:
            Updated user or None if the user does not exist
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        user.full_name = full_name
        return await self.update(user)


class ProfileRepository(AsyncBaseRepository[Profile]):
    """Repository for academic profile data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Profile)

    async def get_by_user_id(self, user_id: int) -> Optional[Profile]:
        """Get the profile of a user.

        Args:
            user_id: Owning user ID

        Returns:
            Profile instance or None when the user has not filled one in
        """
        stmt = select(Profile).where(Profile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, user_id: int, values: Dict[str, Any]) -> Profile:
        """Create the profile of a user, or overwrite the given fields of the existing one.

        Args:
            user_id: Owning user ID
            values: Column values keyed by entity field name

        Returns:
            Persisted profile
        """
        profile = await self.get_by_user_id(user_id)
        if profile is None:
            profile = Profile(user_id=user_id, **values)
            return await self.create(profile)

        for key, value in values.items():
            setattr(profile, key, value)
        profile.updated_at = utc_now()
        return await self.update(profile)
