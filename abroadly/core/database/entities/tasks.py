"""
Task tracker entity models.

This module contains the entities behind the application task tracker:
task groups, tasks and subtasks. Tasks reference their groups through a
denormalized JSON array of group ids instead of a join table.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Text
from sqlmodel import JSON, Field

from ..base import Base, utc_now
from ._types import TIMESTAMP, enum_column


class TaskType(str, Enum):
    """Scope of a recommended task."""

    GLOBAL = "GLOBAL"
    UNIV_SPECIFIC = "UNIV_SPECIFIC"
    GROUP = "GROUP"


class TaskPriority(str, Enum):
    """Priority of a task."""

    MUST = "MUST"
    NEED = "NEED"
    NICE = "NICE"


class TaskStatus(str, Enum):
    """Progress of a task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SubtaskPriority(str, Enum):
    """Priority of a subtask."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


DEFAULT_GROUP_COLOR = "bg-blue-500"


class TaskGroup(Base, table=True):
    """User defined group used to organise tasks.

    Table: task_groups
    """

    __tablename__ = "task_groups"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, sa_type=Text)
    color: str = Field(default=DEFAULT_GROUP_COLOR, max_length=50)

    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, sa_column_kwargs={"onupdate": utc_now})


class Task(Base, table=True):
    """Application task owned by a user.

    Table: tasks
    """

    __tablename__ = "tasks"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=255)
    priority: TaskPriority = Field(default=TaskPriority.NEED, sa_type=enum_column(TaskPriority, "task_priority"))
    due_date: Optional[date] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.TODO, sa_type=enum_column(TaskStatus, "task_status"))
    group_ids: List[str] = Field(default_factory=list, sa_type=JSON)
    notes: Optional[str] = Field(default=None, sa_type=Text)

    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Task(id={self.id}, title={self.title}, status={self.status})"


class Subtask(Base, table=True):
    """Checklist item belonging to a task.

    Table: subtasks
    """

    __tablename__ = "subtasks"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    task_id: uuid.UUID = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    priority: SubtaskPriority = Field(
        default=SubtaskPriority.MEDIUM, sa_type=enum_column(SubtaskPriority, "subtask_priority")
    )
    completed: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, sa_column_kwargs={"onupdate": utc_now})
