"""
Service for the task tracker.

Every operation is scoped to the calling user: a task owned by someone else
is reported exactly like a missing one. Subtasks are only reachable through
a task the caller owns.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import Subtask, SubtaskPriority, Task, TaskPriority, TaskStatus
from abroadly.core.database.repositories import TaskRepository
from abroadly.core.logging_config import get_logger
from abroadly.core.models.io import SubtaskCreate, SubtaskUpdate, TaskCreate, TaskUpdate

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 200


def parse_deadline(value: Optional[str]) -> Optional[date]:
    """
    Parse a deadline sent by the client.

    Accepts an ISO 8601 date or date-time (a trailing ``Z`` included); an
    empty value clears the deadline.

    Raises:
        HTTPException: 400 when the value is not a date
    """
    if value is None or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid deadline date")


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def validate_title(title: Optional[str], kind: str, *, required: bool) -> None:
    """Check a task or subtask title; ``required`` distinguishes create from update messages."""
    if title is None or not title.strip():
        raise _bad_request(f"{kind} title is required" if required else f"{kind} title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        raise _bad_request(f"{kind} title is too long (max 200 characters)")


class TaskService:
    """Service for tasks and subtasks of a user."""

    def __init__(self, session: AsyncSession):
        """Initialize task service with database session."""
        self.tasks = TaskRepository(session)

    async def list_tasks(self, user_id: int) -> List[Task]:
        return await self.tasks.list_for_user(user_id)

    async def get_task(self, task_id: str, user_id: int) -> Task:
        """
        Get a task owned by the user.

        Raises:
            HTTPException: 404 when missing or owned by another user
        """
        task = await self.tasks.get_for_user(task_id, user_id)
        if task is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
        return task

    async def create_task(self, user_id: int, data: TaskCreate) -> Task:
        """
        Create a task.

        ``description`` is stored as notes, ``deadline`` as the due date and
        the priority defaults to NEED.
        """
        validate_title(data.title, "Task", required=True)
        task = Task(
            user_id=user_id,
            title=data.title.strip(),
            notes=data.description,
            priority=data.priority or TaskPriority.NEED,
            due_date=parse_deadline(data.deadline),
            group_ids=data.group_ids or [],
        )
        task = await self.tasks.create(task)
        logger.info(f"User {user_id} created task {task.id}")
        return task

    async def update_task(self, task_id: str, user_id: int, data: TaskUpdate) -> Task:
        """
        Update the fields present in the request body.

        Raises:
            HTTPException: 404 for tasks the user does not own, 400 on invalid values
        """
        task = await self.get_task(task_id, user_id)
        sent = data.model_fields_set

        if "title" in sent:
            validate_title(data.title, "Task", required=False)
            task.title = data.title.strip()
        if "description" in sent:
            task.notes = data.description
        if "notes" in sent:
            task.notes = data.notes
        if "priority" in sent and data.priority is not None:
            task.priority = data.priority
        if "status" in sent and data.status is not None:
            task.status = data.status
        if "deadline" in sent:
            task.due_date = parse_deadline(data.deadline)
        if "due_date" in sent:
            task.due_date = parse_deadline(data.due_date)
        if "group_ids" in sent:
            task.group_ids = list(data.group_ids or [])

        return await self.tasks.update(task)

    async def delete_task(self, task_id: str, user_id: int) -> None:
        task = await self.get_task(task_id, user_id)
        await self.tasks.delete_task(task)
        logger.info(f"User {user_id} deleted task {task_id}")

    async def update_status(self, task_id: str, user_id: int, new_status: Optional[str]) -> Task:
        """
        Move a task to another status.

        Raises:
            HTTPException: 400 for an unknown status, 404 for tasks the user does not own
        """
        try:
            parsed = TaskStatus(new_status)
        except ValueError:
            raise _bad_request("Invalid status. Must be one of: todo, in_progress, completed")
        task = await self.get_task(task_id, user_id)
        task.status = parsed
        return await self.tasks.update(task)

    # --- subtasks ---

    async def list_subtasks(self, task_id: str, user_id: int) -> List[Subtask]:
        task = await self.get_task(task_id, user_id)
        return await self.tasks.list_subtasks(task.id)

    async def create_subtask(self, task_id: str, user_id: int, data: SubtaskCreate) -> Subtask:
        task = await self.get_task(task_id, user_id)
        validate_title(data.title, "Subtask", required=True)
        subtask = Subtask(
            task_id=task.id,
            title=data.title.strip(),
            description=data.description,
            priority=data.priority or SubtaskPriority.MEDIUM,
        )
        return await self.tasks.create_subtask(subtask)

    async def _get_subtask(self, task_id: str, subtask_id: str, user_id: int) -> Subtask:
        task = await self.get_task(task_id, user_id)
        subtask = await self.tasks.get_subtask(task.id, subtask_id)
        if subtask is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subtask not found")
        return subtask

    async def update_subtask(self, task_id: str, subtask_id: str, user_id: int, data: SubtaskUpdate) -> Subtask:
        subtask = await self._get_subtask(task_id, subtask_id, user_id)
        sent = data.model_fields_set
        if "title" in sent:
            validate_title(data.title, "Subtask", required=False)
            subtask.title = data.title.strip()
        if "description" in sent:
            subtask.description = data.description
        if "priority" in sent and data.priority is not None:
            subtask.priority = data.priority
        if "completed" in sent and data.completed is not None:
            subtask.completed = data.completed
        return await self.tasks.update_subtask(subtask)

    async def delete_subtask(self, task_id: str, subtask_id: str, user_id: int) -> None:
        subtask = await self._get_subtask(task_id, subtask_id, user_id)
        await self.tasks.delete_subtask(subtask)

    async def toggle_subtask(self, task_id: str, subtask_id: str, user_id: int) -> Subtask:
        """Flip the completed flag of a subtask."""
        subtask = await self._get_subtask(task_id, subtask_id, user_id)
        subtask.completed = not subtask.completed
        return await self.tasks.update_subtask(subtask)
