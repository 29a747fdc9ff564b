"""
Database entity models.

Importing this package registers every table with ``Base.metadata`` so that
``create_all`` and Alembic see the complete schema.
"""

from .chats import Chat, Message, MessageRole
from .scholarships import Scholarship, ScholarshipType, UserScholarshipFavorite
from .tasks import (
    DEFAULT_GROUP_COLOR,
    Subtask,
    SubtaskPriority,
    Task,
    TaskGroup,
    TaskPriority,
    TaskStatus,
    TaskType,
)
from .universities import (
    University,
    UniversityScholarship,
    UniversitySource,
    UniversityType,
    UserFavorite,
)
from .users import Profile, ScoreScale, TargetLevel, User

__all__ = [
    "Chat",
    "DEFAULT_GROUP_COLOR",
    "Message",
    "MessageRole",
    "Profile",
    "Scholarship",
    "ScholarshipType",
    "ScoreScale",
    "Subtask",
    "SubtaskPriority",
    "TargetLevel",
    "Task",
    "TaskGroup",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "University",
    "UniversityScholarship",
    "UniversitySource",
    "UniversityType",
    "User",
    "UserFavorite",
    "UserScholarshipFavorite",
]
