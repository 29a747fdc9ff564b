"""
Data access layer.

One repository per business table group; each takes an ``AsyncSession`` and
commits its own writes.
"""

from .base import AsyncBaseRepository, QueryBuilder, parse_uuid
from .chats import ChatRepository
from .favorites import FavoriteRepository, ScholarshipFavoriteRepository
from .scholarships import ScholarshipRepository
from .task_groups import TaskGroupRepository
from .tasks import TaskRepository
from .universities import UniversityFilters, UniversityRepository
from .users import ProfileRepository, UserRepository

__all__ = [
    "AsyncBaseRepository",
    "ChatRepository",
    "FavoriteRepository",
    "ProfileRepository",
    "QueryBuilder",
    "ScholarshipFavoriteRepository",
    "ScholarshipRepository",
    "TaskGroupRepository",
    "TaskRepository",
    "UniversityFilters",
    "UniversityRepository",
    "UserRepository",
    "parse_uuid",
]
