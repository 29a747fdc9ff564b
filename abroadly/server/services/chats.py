"""
Service for advisor chats.

Chats belong to a user and hold an ordered list of messages. Posting a user
message stores it and then asks the AI service for the assistant's reply,
using the chat history, the user's profile and their favorites as context.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import Chat, Message, MessageRole
from abroadly.core.database.repositories import (
    ChatRepository,
    FavoriteRepository,
    ProfileRepository,
    ScholarshipFavoriteRepository,
)
from abroadly.core.logging_config import get_logger

from .ai_service import AIService, profile_to_prompt_dict

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 200
MAX_MESSAGE_LENGTH = 10000


@dataclass
class PostedMessage:
    """Outcome of posting a message to a chat."""

    user_message: Message
    ai_message: Optional[Message] = None
    suggested_tasks: Optional[list] = None
    error: Optional[str] = None


def default_chat_title(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"Chat {today.month}/{today.day}/{today.year}"


class ChatService:
    """Service for chats and their messages."""

    def __init__(self, session: AsyncSession, ai_service: Optional[AIService] = None):
        """
        Initialize chat service.

        Args:
            session: Database session
            ai_service: AI service used to answer user messages
        """
        self.session = session
        self.chats = ChatRepository(session)
        self.ai_service = ai_service

    async def list_recent(self, user_id: int) -> List[Chat]:
        return await self.chats.list_recent(user_id)

    async def get_chat(self, chat_id: str, user_id: int) -> Chat:
        """
        Get a chat owned by the user.

        Raises:
            HTTPException: 404 when missing or owned by another user
        """
        chat = await self.chats.get_for_user(chat_id, user_id)
        if chat is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")
        return chat

    async def get_chat_with_messages(self, chat_id: str, user_id: int) -> Tuple[Chat, List[Message]]:
        chat = await self.get_chat(chat_id, user_id)
        return chat, await self.chats.list_messages(chat.id)

    async def create_chat(self, user_id: int, title: Optional[str] = None) -> Chat:
        chat = await self.chats.create(Chat(user_id=user_id, title=title or default_chat_title()))
        logger.info(f"User {user_id} started chat {chat.id}")
        return chat

    async def rename_chat(self, chat_id: str, user_id: int, title: Optional[str]) -> Chat:
        """
        Rename a chat.

        Raises:
            HTTPException: 404 for chats the user does not own, 400 on an empty or long title
        """
        chat = await self.get_chat(chat_id, user_id)
        if title is None or not title.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Chat title cannot be empty")
        if len(title) > MAX_TITLE_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Chat title is too long (max 200 characters)"
            )
        chat.title = title
        return await self.chats.update(chat)

    async def delete_chat(self, chat_id: str, user_id: int) -> None:
        chat = await self.get_chat(chat_id, user_id)
        await self.chats.delete_chat(chat)
        logger.info(f"User {user_id} deleted chat {chat_id}")

    async def list_messages(self, chat_id: str, user_id: int) -> List[Message]:
        chat = await self.get_chat(chat_id, user_id)
        return await self.chats.list_messages(chat.id)

    async def post_message(
        self, chat_id: str, user_id: int, role: Optional[str], content: Optional[str]
    ) -> PostedMessage:
        """
        Store a message and, for user messages, the assistant's reply.

        Args:
            chat_id: Chat ID
            user_id: Requesting user ID
            role: ``user`` or ``assistant``
            content: Message text, at most 10000 characters

        Returns:
            The stored message, plus the reply (or the reason it is missing)
            when the message came from the user

        Raises:
            HTTPException: 404 for chats the user does not own, 400 on invalid input
        """
        chat = await self.get_chat(chat_id, user_id)

        if content is None or not content.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message content is required")
        if len(content) > MAX_MESSAGE_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Message is too long (max 10000 characters)"
            )
        if role not in (MessageRole.USER.value, MessageRole.ASSISTANT.value):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid message role (must be 'user' or 'assistant')",
            )

        user_message = await self.chats.add_message(chat, role, content)
        if role != MessageRole.USER.value:
            return PostedMessage(user_message=user_message)

        try:
            reply = await self._generate_reply(chat, user_id, content)
            ai_message = await self.chats.add_message(chat, MessageRole.ASSISTANT.value, reply["response"])
        except Exception as e:
            logger.error(f"Failed to generate AI response for chat {chat.id}: {e}", exc_info=True)
            return PostedMessage(user_message=user_message, error=str(e) or "Failed to generate AI response")

        return PostedMessage(
            user_message=user_message,
            ai_message=ai_message,
            suggested_tasks=reply.get("suggestedTasks") or [],
        )

    async def _generate_reply(self, chat: Chat, user_id: int, content: str) -> dict:
        if self.ai_service is None:
            raise RuntimeError("AI service is not available")
        history = [{"role": m.role, "content": m.content} for m in await self.chats.list_messages(chat.id)]
        profile = await ProfileRepository(self.session).get_by_user_id(user_id)
        universities = await FavoriteRepository(self.session).list_university_names(user_id)
        scholarships = await ScholarshipFavoriteRepository(self.session).list_scholarship_names(user_id)
        return await self.ai_service.generate_chat_response(
            content, profile_to_prompt_dict(profile), universities, scholarships, history
        )
