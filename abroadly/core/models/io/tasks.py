"""
Task tracker I/O models for API requests and responses.

This module contains the schemas for tasks, their subtasks and the task
groups used to organise them. Titles and names are optional at the schema
level; the task services report missing or oversized values with their own
messages.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from abroadly.core.database.entities import SubtaskPriority, TaskPriority, TaskStatus

from .common import CamelModel

# =====================================================================
# Tasks
# =====================================================================


class TaskCreate(CamelModel):
    """Schema for creating a task.

    ``description`` is stored as the task notes and ``deadline`` as its due
    date.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    deadline: Optional[str] = Field(default=None, description="Due date, ISO 8601")
    group_ids: Optional[List[str]] = None


class TaskUpdate(CamelModel):
    """Schema for updating a task. Only fields present in the body are changed."""

    title: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    deadline: Optional[str] = None
    due_date: Optional[str] = None
    group_ids: Optional[List[str]] = None


class TaskStatusUpdate(CamelModel):
    status: Optional[str] = None


class SubtaskRead(CamelModel):
    """Schema for reading a subtask."""

    id: UUID
    task_id: UUID
    title: str
    description: Optional[str] = None
    priority: SubtaskPriority
    completed: bool
    created_at: datetime
    updated_at: datetime


class TaskRead(CamelModel):
    """Schema for reading a task."""

    id: UUID
    title: str
    priority: TaskPriority
    group_ids: List[str] = Field(default_factory=list)
    due_date: Optional[date] = None
    status: TaskStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TaskWithSubtasksRead(TaskRead):
    subtasks: List[SubtaskRead] = Field(default_factory=list)


class TaskResponse(CamelModel):
    task: TaskRead


class TaskStatusResponse(CamelModel):
    message: str
    task: TaskRead


# =====================================================================
# Subtasks
# =====================================================================


class SubtaskCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[SubtaskPriority] = None


class SubtaskUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[SubtaskPriority] = None
    completed: Optional[bool] = None


class SubtaskListResponse(CamelModel):
    subtasks: List[SubtaskRead]


class SubtaskResponse(CamelModel):
    subtask: SubtaskRead


class SubtaskMessageResponse(CamelModel):
    message: str
    subtask: SubtaskRead


# =====================================================================
# Task groups
# =====================================================================


class TaskGroupCreate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, description="Tailwind background class or hex color")


class TaskGroupUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class TaskGroupRead(CamelModel):
    """Schema for reading a task group."""

    id: UUID
    name: str
    description: Optional[str] = None
    color: str
    created_at: datetime
    updated_at: datetime


class TaskGroupResponse(CamelModel):
    group: TaskGroupRead
