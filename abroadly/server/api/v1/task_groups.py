"""
API endpoints for task groups.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from abroadly.core.models.io import MessageResponse, TaskGroupCreate, TaskGroupRead, TaskGroupResponse, TaskGroupUpdate
from abroadly.server.services.deps import CurrentUserIdDep, SessionDep
from abroadly.server.services.task_groups import TaskGroupService

router = APIRouter(tags=["task-groups"])


@router.get(
    "",
    response_model=list[TaskGroupRead],
    summary="List Task Groups",
    description="Retrieve the caller's task groups, oldest first.",
)
async def list_groups(user_id: CurrentUserIdDep, session: SessionDep) -> list[TaskGroupRead]:
    groups = await TaskGroupService(session).list_groups(user_id)
    return [TaskGroupRead.model_validate(g) for g in groups]


@router.get(
    "/{group_id}",
    response_model=TaskGroupResponse,
    summary="Get Task Group",
    responses={404: {"description": "Task group not found"}},
)
async def get_group(group_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> TaskGroupResponse:
    group = await TaskGroupService(session).get_group(group_id, user_id)
    return TaskGroupResponse(group=TaskGroupRead.model_validate(group))


@router.post(
    "",
    response_model=TaskGroupRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task Group",
    responses={
        201: {"description": "Task group created"},
        400: {"description": "Missing name or invalid color"},
    },
)
async def create_group(body: TaskGroupCreate, user_id: CurrentUserIdDep, session: SessionDep) -> TaskGroupRead:
    """
    Create a task group.

    - **name**: Required, at most 100 characters.
    - **color**: Tailwind background class such as `bg-blue-500` (default) or a hex color.
    """
    group = await TaskGroupService(session).create_group(user_id, body)
    return TaskGroupRead.model_validate(group)


@router.put(
    "/{group_id}",
    response_model=TaskGroupRead,
    summary="Update Task Group",
    responses={
        400: {"description": "Empty name or invalid color"},
        404: {"description": "Task group not found"},
    },
)
async def update_group(
    group_id: str, body: TaskGroupUpdate, user_id: CurrentUserIdDep, session: SessionDep
) -> TaskGroupRead:
    group = await TaskGroupService(session).update_group(group_id, user_id, body)
    return TaskGroupRead.model_validate(group)


@router.delete(
    "/{group_id}",
    response_model=MessageResponse,
    summary="Delete Task Group",
    responses={404: {"description": "Task group not found"}},
)
async def delete_group(group_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> MessageResponse:
    await TaskGroupService(session).delete_group(group_id, user_id)
    return MessageResponse(message="Task group deleted successfully")
