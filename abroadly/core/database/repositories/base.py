"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns and interfaces
used across all repository implementations in the centralized database layer.
Built with async SQLAlchemy sessions; every write commits its own transaction.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """Coerce a path/query value to a UUID.

    Args:
        value: UUID instance or its string form

    Returns:
        The UUID, or None when the value is not a valid UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class AsyncBaseRepository(Generic[EntityType]):
    """Base async repository with common CRUD operations using SQLModel."""

    #: Whether the primary key is a UUID; lookups then accept its string form.
    uuid_pk: bool = False

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Bind the repository to a session and an entity class."""
        self.session = session
        self.model = model

    async def create(self, entity: EntityType) -> EntityType:
        """Persist a new entity and return it refreshed."""
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: Any) -> Optional[EntityType]:
        """Get entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found
        """
        if self.uuid_pk:
            entity_id = parse_uuid(entity_id)
            if entity_id is None:
                return None
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType) -> EntityType:
        """Save changes to an entity, bumping ``updated_at`` when it has one."""
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: Any) -> bool:
        """Delete entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            True if deleted, False if not found
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities matching equality ``filters``, paginated, in storage order."""
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        result = await self.session.execute(QueryBuilder.apply_pagination(stmt, limit, offset))
        return list(result.scalars().all())

    async def _count(self, stmt) -> int:
        """Count the rows a select statement would return."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        result = await self.session.execute(count_stmt)
        return int(result.scalar_one())

    async def _page(self, stmt, limit: Optional[int], offset: Optional[int]) -> Tuple[List[EntityType], int]:
        """Run a select statement with pagination and return ``(rows, total)``."""
        total = await self._count(stmt)
        result = await self.session.execute(QueryBuilder.apply_pagination(stmt, limit, offset))
        return list(result.scalars().all()), total


class QueryBuilder:
    """Statement helpers shared by the repositories."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Add an equality condition for every set filter naming a column of ``model``."""
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_contains(stmt, column, text: Optional[str]):
        """Case-insensitive substring match; blank text leaves the statement as is."""
        if text is None or not text.strip():
            return stmt
        return stmt.where(column.ilike(f"%{text.strip()}%"))

    @staticmethod
    def apply_range(stmt, column, lower: Any = None, upper: Any = None):
        """Inclusive bounds on ``column``; either side may be omitted."""
        if lower is not None:
            stmt = stmt.where(column >= lower)
        if upper is not None:
            stmt = stmt.where(column <= upper)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt
