"""
Chat and message repositories.

This module provides data access operations for advisor conversations.
Chats are always read through their owner; appending a message moves the
chat to the top of the recent list by bumping ``updated_at``.
"""

from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.chats import Chat, Message
from .base import AsyncBaseRepository, parse_uuid

RECENT_CHATS_LIMIT = 5


class ChatRepository(AsyncBaseRepository[Chat]):
    """Repository for chat data access operations using SQLModel."""

    uuid_pk = True

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async session for database operations
        """
        super().__init__(session, Chat)

    async def list_recent(self, user_id: int, limit: int = RECENT_CHATS_LIMIT) -> List[Chat]:
        """Get the most recently updated chats of a user.

        Args:
            user_id: Owning user ID
            limit: Maximum number of chats

        Returns:
            Chats ordered by ``updated_at`` descending
        """
        stmt = (
            select(Chat)
            .where(Chat.user_id == user_id)
            .order_by(Chat.updated_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, chat_id: Any, user_id: int) -> Optional[Chat]:
        """Get a chat only if it belongs to the given user."""
        cid = parse_uuid(chat_id)
        if cid is None:
            return None
        stmt = select(Chat).where(Chat.id == cid, Chat.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_chat(self, chat: Chat) -> None:
        """Delete a chat together with all of its messages."""
        await self.session.execute(delete(Message).where(Message.chat_id == chat.id))
        await self.session.delete(chat)
        await self.session.commit()

    async def list_messages(self, chat_id: Any) -> List[Message]:
        """Get the messages of a chat in chronological order."""
        cid = parse_uuid(chat_id)
        if cid is None:
            return []
        stmt = select(Message).where(Message.chat_id == cid).order_by(Message.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_message(self, chat: Chat, role: str, content: str) -> Message:
        """Append a message to a chat and bump the chat's ``updated_at``.

        Args:
            chat: Parent chat
            role: ``user`` or ``assistant``
            content: Message text

        Returns:
            Persisted message
        """
        message = Message(chat_id=chat.id, role=role, content=content)
        chat.updated_at = utc_now()
        self.session.add(message)
        self.session.add(chat)
        await self.session.commit()
        await self.session.refresh(message)
        return message
