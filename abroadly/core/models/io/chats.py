"""
Chat I/O models for API requests and responses.

This module contains the schemas for the advisor chat: conversations owned
by the caller and the messages exchanged within them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class ChatCreate(CamelModel):
    """Schema for starting a chat."""

    title: Optional[str] = Field(default=None, description="Chat title, defaults to 'Chat <date>'")


class ChatUpdate(CamelModel):
    """Schema for renaming a chat."""

    title: Optional[str] = None


class MessageRead(CamelModel):
    """Schema for reading a chat message."""

    id: UUID
    chat_id: UUID
    role: str
    content: str
    created_at: datetime


class ChatRead(CamelModel):
    """Schema for reading a chat."""

    id: UUID
    user_id: int
    title: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ChatWithMessagesRead(ChatRead):
    messages: List[MessageRead] = Field(default_factory=list)


class ChatListResponse(CamelModel):
    chats: List[ChatRead]


class ChatResponse(CamelModel):
    chat: ChatRead


class ChatDetailResponse(CamelModel):
    chat: ChatWithMessagesRead


class MessageListResponse(CamelModel):
    messages: List[MessageRead]


class MessageCreate(CamelModel):
    """Schema for posting a message to a chat."""

    role: Optional[str] = Field(default="user", description="'user' or 'assistant'")
    content: Optional[str] = None


class MessageCreatedResponse(CamelModel):
    """Stored message and, for user messages, the generated assistant reply.

    ``ai_message`` and ``suggested_tasks`` are only present for user messages;
    ``error`` is set instead of ``ai_message`` content when the reply could
    not be generated.
    """

    user_message: MessageRead
    ai_message: Optional[MessageRead] = None
    suggested_tasks: Optional[List[Any]] = None
    error: Optional[str] = None
