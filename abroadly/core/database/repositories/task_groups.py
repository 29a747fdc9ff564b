"""
Task group repository.
"""

from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.tasks import TaskGroup
from .base import AsyncBaseRepository, parse_uuid


class TaskGroupRepository(AsyncBaseRepository[TaskGroup]):
    """Repository for task group data access operations, scoped to the owning user."""

    uuid_pk = True

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TaskGroup)

    async def list_for_user(self, user_id: int) -> List[TaskGroup]:
        """Get the task groups of a user, oldest first."""
        stmt = select(TaskGroup).where(TaskGroup.user_id == user_id).order_by(TaskGroup.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, group_id: Any, user_id: int) -> Optional[TaskGroup]:
        """Get a task group only if it belongs to the given user."""
        gid = parse_uuid(group_id)
        if gid is None:
            return None
        stmt = select(TaskGroup).where(TaskGroup.id == gid, TaskGroup.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
