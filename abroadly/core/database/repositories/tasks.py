"""
Task and subtask repositories.

Every task lookup is scoped to the owning user; a task that belongs to
someone else is indistinguishable from a missing one. Subtasks are reached
through their parent task.
"""

from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.tasks import Subtask, Task
from .base import AsyncBaseRepository, parse_uuid


class TaskRepository(AsyncBaseRepository[Task]):
    """Repository for task data access operations using SQLModel."""

    uuid_pk = True

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async session for database operations
        """
        super().__init__(session, Task)

    async def list_for_user(self, user_id: int) -> List[Task]:
        """Get all tasks of a user, newest first."""
        stmt = select(Task).where(Task.user_id == user_id).order_by(Task.created_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, task_id: Any, user_id: int) -> Optional[Task]:
        """Get a task only if it belongs to the given user.

        Args:
            task_id: Task ID
            user_id: Requesting user ID

        Returns:
            Task instance or None when missing or owned by another user
        """
        tid = parse_uuid(task_id)
        if tid is None:
            return None
        stmt = select(Task).where(Task.id == tid, Task.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_task(self, task: Task) -> None:
        """Delete a task together with its subtasks."""
        await self.session.execute(delete(Subtask).where(Subtask.task_id == task.id))
        await self.session.delete(task)
        await self.session.commit()

    # --- subtasks ---

    async def list_subtasks(self, task_id: Any) -> List[Subtask]:
        """Get the subtasks of a task, newest first."""
        tid = parse_uuid(task_id)
        if tid is None:
            return []
        stmt = select(Subtask).where(Subtask.task_id == tid).order_by(Subtask.created_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_subtask(self, task_id: Any, subtask_id: Any) -> Optional[Subtask]:
        """Get a subtask only if it belongs to the given task."""
        tid, sid = parse_uuid(task_id), parse_uuid(subtask_id)
        if tid is None or sid is None:
            return None
        stmt = select(Subtask).where(Subtask.id == sid, Subtask.task_id == tid)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_subtask(self, subtask: Subtask) -> Subtask:
        self.session.add(subtask)
        await self.session.commit()
        await self.session.refresh(subtask)
        return subtask

    async def update_subtask(self, subtask: Subtask) -> Subtask:
        return await self.update(subtask)  # type: ignore[arg-type]

    async def delete_subtask(self, subtask: Subtask) -> None:
        await self.session.delete(subtask)
        await self.session.commit()
