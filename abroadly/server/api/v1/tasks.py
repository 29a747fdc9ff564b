"""
API endpoints for the task tracker.

Tasks and their subtasks belong to the authenticated user. A task owned by
another user is reported as not found.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, status

from abroadly.core.models.io import (
    MessageResponse,
    SubtaskCreate,
    SubtaskListResponse,
    SubtaskMessageResponse,
    SubtaskRead,
    SubtaskResponse,
    SubtaskUpdate,
    TaskCreate,
    TaskRead,
    TaskResponse,
    TaskStatusResponse,
    TaskStatusUpdate,
    TaskUpdate,
    TaskWithSubtasksRead,
)
from abroadly.server.services.deps import CurrentUserIdDep, SessionDep
from abroadly.server.services.tasks import TaskService

router = APIRouter(tags=["tasks"])


# =====================================================================
# Tasks
# =====================================================================


@router.get(
    "",
    response_model=None,
    summary="List Tasks",
    description="Retrieve the caller's tasks, newest first. Set `withSubtasks=true` to embed each task's subtasks.",
    responses={200: {"model": list[TaskWithSubtasksRead], "description": "Tasks retrieved"}},
)
async def list_tasks(
    user_id: CurrentUserIdDep,
    session: SessionDep,
    with_subtasks: bool = Query(default=False, alias="withSubtasks"),
) -> list[dict[str, Any]]:
    service = TaskService(session)
    tasks = await service.list_tasks(user_id)
    if not with_subtasks:
        return [TaskRead.model_validate(t).model_dump(by_alias=True, mode="json") for t in tasks]

    results = []
    for task in tasks:
        subtasks = await service.list_subtasks(str(task.id), user_id)
        read = TaskWithSubtasksRead.model_validate(task)
        read.subtasks = [SubtaskRead.model_validate(s) for s in subtasks]
        results.append(read.model_dump(by_alias=True, mode="json"))
    return results


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get Task",
    responses={404: {"description": "Task not found"}},
)
async def get_task(task_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> TaskResponse:
    task = await TaskService(session).get_task(task_id, user_id)
    return TaskResponse(task=TaskRead.model_validate(task))


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a task. `description` is stored as the task notes and `deadline` as its due date.",
    responses={
        201: {"description": "Task created"},
        400: {"description": "Missing or invalid title or deadline"},
    },
)
async def create_task(body: TaskCreate, user_id: CurrentUserIdDep, session: SessionDep) -> TaskRead:
    """
    Create a task.

    - **title**: Required, at most 200 characters.
    - **priority**: MUST, NEED (default) or NICE.
    - **deadline**: ISO 8601 date.
    - **groupIds**: Task groups the task is shown in.
    """
    task = await TaskService(session).create_task(user_id, body)
    return TaskRead.model_validate(task)


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update Task",
    description="Update the fields present in the body.",
    responses={
        400: {"description": "Invalid title or deadline"},
        404: {"description": "Task not found"},
    },
)
async def update_task(task_id: str, body: TaskUpdate, user_id: CurrentUserIdDep, session: SessionDep) -> TaskRead:
    task = await TaskService(session).update_task(task_id, user_id, body)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete Task",
    description="Delete a task together with its subtasks.",
    responses={404: {"description": "Task not found"}},
)
async def delete_task(task_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> MessageResponse:
    await TaskService(session).delete_task(task_id, user_id)
    return MessageResponse(message="Task deleted successfully")


@router.patch(
    "/{task_id}/status",
    response_model=TaskStatusResponse,
    summary="Update Task Status",
    responses={
        400: {"description": "Unknown status"},
        404: {"description": "Task not found"},
    },
)
async def update_task_status(
    task_id: str, body: TaskStatusUpdate, user_id: CurrentUserIdDep, session: SessionDep
) -> TaskStatusResponse:
    task = await TaskService(session).update_status(task_id, user_id, body.status)
    return TaskStatusResponse(message="Task status updated successfully", task=TaskRead.model_validate(task))


# =====================================================================
# Subtasks
# =====================================================================


@router.get(
    "/{task_id}/subtasks",
    response_model=SubtaskListResponse,
    summary="List Subtasks",
    description="Retrieve the subtasks of a task, newest first.",
    responses={404: {"description": "Task not found"}},
)
async def list_subtasks(task_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> SubtaskListResponse:
    subtasks = await TaskService(session).list_subtasks(task_id, user_id)
    return SubtaskListResponse(subtasks=[SubtaskRead.model_validate(s) for s in subtasks])


@router.post(
    "/{task_id}/subtasks",
    response_model=SubtaskMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Subtask",
    responses={
        400: {"description": "Missing or invalid title"},
        404: {"description": "Task not found"},
    },
)
async def create_subtask(
    task_id: str, body: SubtaskCreate, user_id: CurrentUserIdDep, session: SessionDep
) -> SubtaskMessageResponse:
    subtask = await TaskService(session).create_subtask(task_id, user_id, body)
    return SubtaskMessageResponse(message="Subtask created successfully", subtask=SubtaskRead.model_validate(subtask))


@router.put(
    "/{task_id}/subtasks/{subtask_id}",
    response_model=SubtaskMessageResponse,
    summary="Update Subtask",
    responses={404: {"description": "Task or subtask not found"}},
)
async def update_subtask(
    task_id: str, subtask_id: str, body: SubtaskUpdate, user_id: CurrentUserIdDep, session: SessionDep
) -> SubtaskMessageResponse:
    subtask = await TaskService(session).update_subtask(task_id, subtask_id, user_id, body)
    return SubtaskMessageResponse(message="Subtask updated successfully", subtask=SubtaskRead.model_validate(subtask))


@router.delete(
    "/{task_id}/subtasks/{subtask_id}",
    response_model=MessageResponse,
    summary="Delete Subtask",
    responses={404: {"description": "Task or subtask not found"}},
)
async def delete_subtask(
    task_id: str, subtask_id: str, user_id: CurrentUserIdDep, session: SessionDep
) -> MessageResponse:
    await TaskService(session).delete_subtask(task_id, subtask_id, user_id)
    return MessageResponse(message="Subtask deleted successfully")


@router.patch(
    "/{task_id}/subtasks/{subtask_id}/toggle",
    response_model=SubtaskResponse,
    summary="Toggle Subtask",
    description="Flip the completed flag of a subtask.",
    responses={404: {"description": "Task or subtask not found"}},
)
async def toggle_subtask(
    task_id: str, subtask_id: str, user_id: CurrentUserIdDep, session: SessionDep
) -> SubtaskResponse:
    subtask = await TaskService(session).toggle_subtask(task_id, subtask_id, user_id)
    return SubtaskResponse(subtask=SubtaskRead.model_validate(subtask))
