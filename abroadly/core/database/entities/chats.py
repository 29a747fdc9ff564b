"""
Chat entity models.

This module contains the database entities for the advisor chat: a chat is
a conversation owned by a user, and messages are role-tagged turns within
it. Messages are removed together with their chat.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_now
from ._types import TIMESTAMP


class MessageRole(str, Enum):
    """Role of message sender in conversation."""

    USER = "user"
    ASSISTANT = "assistant"


class Chat(Base, table=True):
    """Conversation between a user and the AI advisor.

    Table: chats
    """

    __tablename__ = "chats"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    title: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, index=True)

    def __repr__(self) -> str:
        return f"Chat(id={self.id}, title={self.title})"


class Message(Base, table=True):
    """Single turn within a chat.

    Table: messages
    """

    __tablename__ = "messages"
    __table_args__ = ({"extend_existing": True},)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    chat_id: uuid.UUID = Field(foreign_key="chats.id", ondelete="CASCADE", index=True)
    role: str = Field(max_length=20, description="'user' or 'assistant'")
    content: str = Field(sa_type=Text)
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP, index=True)

    def __repr__(self) -> str:
        return f"Message(id={self.id}, role={self.role}, chat_id={self.chat_id})"
