"""
API endpoints for advisor chats.

Chats are conversation rooms owned by the authenticated user. Posting a user
message stores it and answers it with an AI generated assistant message in
the same request.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from abroadly.core.models.io import (
    ChatCreate,
    ChatDetailResponse,
    ChatListResponse,
    ChatRead,
    ChatResponse,
    ChatUpdate,
    ChatWithMessagesRead,
    MessageCreate,
    MessageCreatedResponse,
    MessageListResponse,
    MessageRead,
)
from abroadly.server.services.chats import ChatService
from abroadly.server.services.deps import AIServiceDep, CurrentUserIdDep, SessionDep

router = APIRouter(tags=["chat"])


@router.get(
    "",
    response_model=ChatListResponse,
    summary="List Recent Chats",
    description="Retrieve the five most recently active chats of the caller.",
)
async def list_chats(user_id: CurrentUserIdDep, session: SessionDep) -> ChatListResponse:
    chats = await ChatService(session).list_recent(user_id)
    return ChatListResponse(chats=[ChatRead.model_validate(c) for c in chats])


@router.get(
    "/{chat_id}",
    response_model=ChatDetailResponse,
    summary="Get Chat",
    description="Retrieve a chat together with its full message history.",
    responses={404: {"description": "Chat not found"}},
)
async def get_chat(chat_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> ChatDetailResponse:
    chat, messages = await ChatService(session).get_chat_with_messages(chat_id, user_id)
    detail = ChatWithMessagesRead.model_validate(chat)
    detail.messages = [MessageRead.model_validate(m) for m in messages]
    return ChatDetailResponse(chat=detail)


@router.post(
    "",
    response_model=ChatResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Chat",
    description="Start a chat. Without a title it is named after the current date.",
)
async def create_chat(
    user_id: CurrentUserIdDep, session: SessionDep, body: Optional[ChatCreate] = None
) -> ChatResponse:
    chat = await ChatService(session).create_chat(user_id, body.title if body else None)
    return ChatResponse(chat=ChatRead.model_validate(chat))


@router.put(
    "/{chat_id}",
    response_model=ChatResponse,
    summary="Rename Chat",
    responses={
        400: {"description": "Empty or too long title"},
        404: {"description": "Chat not found"},
    },
)
async def rename_chat(chat_id: str, body: ChatUpdate, user_id: CurrentUserIdDep, session: SessionDep) -> ChatResponse:
    chat = await ChatService(session).rename_chat(chat_id, user_id, body.title)
    return ChatResponse(chat=ChatRead.model_validate(chat))


@router.delete(
    "/{chat_id}",
    summary="Delete Chat",
    description="Delete a chat and all of its messages.",
    responses={404: {"description": "Chat not found"}},
)
async def delete_chat(chat_id: str, user_id: CurrentUserIdDep, session: SessionDep):
    await ChatService(session).delete_chat(chat_id, user_id)
    return {"success": True}


@router.get(
    "/{chat_id}/messages",
    response_model=MessageListResponse,
    summary="List Messages",
    description="Retrieve the messages of a chat in chronological order.",
    responses={404: {"description": "Chat not found"}},
)
async def list_messages(chat_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> MessageListResponse:
    messages = await ChatService(session).list_messages(chat_id, user_id)
    return MessageListResponse(messages=[MessageRead.model_validate(m) for m in messages])


@router.post(
    "/{chat_id}/messages",
    response_model=MessageCreatedResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Post Message",
    description=(
        "Store a message. User messages are answered by the AI advisor; when the reply cannot be "
        "generated `aiMessage` is null and `error` explains why."
    ),
    responses={
        201: {"description": "Message stored"},
        400: {"description": "Missing or invalid content or role"},
        404: {"description": "Chat not found"},
    },
)
async def post_message(
    chat_id: str,
    body: MessageCreate,
    user_id: CurrentUserIdDep,
    session: SessionDep,
    ai_service: AIServiceDep,
) -> MessageCreatedResponse:
    """
    Post a message to a chat.

    - **role**: `user` (default) or `assistant`.
    - **content**: Message text, at most 10000 characters.
    """
    posted = await ChatService(session, ai_service).post_message(chat_id, user_id, body.role, body.content)
    user_message = MessageRead.model_validate(posted.user_message)

    if posted.ai_message is not None:
        return MessageCreatedResponse(
            user_message=user_message,
            ai_message=MessageRead.model_validate(posted.ai_message),
            suggested_tasks=posted.suggested_tasks or [],
        )
    if posted.error is not None:
        return MessageCreatedResponse(user_message=user_message, ai_message=None, error=posted.error)
    return MessageCreatedResponse(user_message=user_message)
