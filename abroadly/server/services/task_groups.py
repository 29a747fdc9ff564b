"""
Service for task groups.
"""

from __future__ import annotations

import re
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import DEFAULT_GROUP_COLOR, TaskGroup
from abroadly.core.database.repositories import TaskGroupRepository
from abroadly.core.logging_config import get_logger
from abroadly.core.models.io import TaskGroupCreate, TaskGroupUpdate

logger = get_logger(__name__)

MAX_NAME_LENGTH = 100

TAILWIND_COLOR = re.compile(
    r"^bg-(slate|gray|zinc|neutral|stone|red|orange|amber|yellow|lime|green|emerald|teal"
    r"|cyan|sky|blue|indigo|violet|purple|fuchsia|pink|rose)-\d{2,3}$"
)
HEX_COLOR = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")


def is_valid_color(color: str) -> bool:
    """Accept Tailwind background classes such as ``bg-blue-500`` or hex colors."""
    return bool(TAILWIND_COLOR.match(color) or HEX_COLOR.match(color))


def _validate(name: Optional[str], color: Optional[str], *, creating: bool) -> None:
    if name is None or not name.strip():
        detail = "Group name is required" if creating else "Group name cannot be empty"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    if len(name) > MAX_NAME_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Group name is too long (max 100 characters)"
        )
    if color and not is_valid_color(color):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid color format (use Tailwind classes like 'bg-blue-500')",
        )


class TaskGroupService:
    """Service for the task groups of a user."""

    def __init__(self, session: AsyncSession):
        self.groups = TaskGroupRepository(session)

    async def list_groups(self, user_id: int) -> List[TaskGroup]:
        return await self.groups.list_for_user(user_id)

    async def get_group(self, group_id: str, user_id: int) -> TaskGroup:
        group = await self.groups.get_for_user(group_id, user_id)
        if group is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task group not found")
        return group

    async def create_group(self, user_id: int, data: TaskGroupCreate) -> TaskGroup:
        _validate(data.name, data.color, creating=True)
        group = TaskGroup(
            user_id=user_id,
            name=data.name.strip(),
            description=data.description,
            color=data.color or DEFAULT_GROUP_COLOR,
        )
        group = await self.groups.create(group)
        logger.info(f"User {user_id} created task group {group.id}")
        return group

    async def update_group(self, group_id: str, user_id: int, data: TaskGroupUpdate) -> TaskGroup:
        """Update the fields present in the request body; 404 for groups the user does not own."""
        group = await self.get_group(group_id, user_id)
        sent = data.model_fields_set
        _validate(data.name if "name" in sent else group.name, data.color, creating=False)

        if "name" in sent:
            group.name = data.name.strip()
        if "description" in sent:
            group.description = data.description
        if data.color:
            group.color = data.color
        return await self.groups.update(group)

    async def delete_group(self, group_id: str, user_id: int) -> None:
        group = await self.get_group(group_id, user_id)
        await self.groups.delete(group.id)
        logger.info(f"User {user_id} deleted task group {group_id}")
