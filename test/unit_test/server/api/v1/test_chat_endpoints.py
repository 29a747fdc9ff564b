"""
Unit tests for the advisor chat endpoints.

Tests cover chat CRUD, posting messages with AI generated replies (through
the scripted model), message validation and cascade deletion.
"""

import re

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from abroadly.core.database.entities import Message
from abroadly.server.services.ai_service import CHAT_ERROR_RESPONSE

pytestmark = pytest.mark.asyncio


async def _create_chat(client: AsyncClient, headers, title=None):
    body = {"title": title} if title else None
    response = await client.post("/chat", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["chat"]


class TestChats:
    """Test chat CRUD."""

    async def test_create_with_default_title(self, client: AsyncClient, auth_headers):
        chat = await _create_chat(client, auth_headers)
        assert re.fullmatch(r"Chat \d{1,2}/\d{1,2}/\d{4}", chat["title"])

    async def test_create_with_title_and_rename(self, client: AsyncClient, auth_headers):
        chat = await _create_chat(client, auth_headers, title="Scholarships")
        assert chat["title"] == "Scholarships"

        response = await client.put(f"/chat/{chat['id']}", json={"title": "UK scholarships"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["chat"]["title"] == "UK scholarships"

    async def test_rename_rejects_empty_title(self, client: AsyncClient, auth_headers):
        chat = await _create_chat(client, auth_headers)
        response = await client.put(f"/chat/{chat['id']}", json={"title": ""}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Chat title cannot be empty"

    async def test_list_returns_at_most_five(self, client: AsyncClient, auth_headers):
        for i in range(7):
            await _create_chat(client, auth_headers, title=f"Chat {i}")
        response = await client.get("/chat", headers=auth_headers)
        assert response.status_code == 200
        assert len(response.json()["chats"]) == 5

    async def test_chat_of_another_user_is_not_found(self, client: AsyncClient, register_user):
        owner = await register_user("owner@example.com")
        other = await register_user("other@example.com")
        chat = await _create_chat(client, owner)

        response = await client.get(f"/chat/{chat['id']}", headers=other)
        assert response.status_code == 404
        assert response.json() == {"error": "Chat not found"}

    async def test_delete_chat_cascades_to_messages(self, client: AsyncClient, auth_headers, session, llm):
        chat = await _create_chat(client, auth_headers)
        llm.queue("Start with your transcripts.")
        await client.post(f"/chat/{chat['id']}/messages", json={"content": "Where do I start?"}, headers=auth_headers)

        response = await client.delete(f"/chat/{chat['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}

        remaining = await session.execute(select(func.count()).select_from(Message))
        assert remaining.scalar_one() == 0
        assert (await client.get(f"/chat/{chat['id']}", headers=auth_headers)).status_code == 404


class TestMessages:
    """Test posting and listing messages."""

    async def test_user_message_gets_ai_reply(self, client: AsyncClient, auth_headers, llm):
        chat = await _create_chat(client, auth_headers)
        llm.queue("  Consider the Chevening scholarship.  ")

        response = await client.post(
            f"/chat/{chat['id']}/messages", json={"content": "Any UK scholarships?"}, headers=auth_headers
        )
        assert response.status_code == 201
        data = response.json()
        assert data["userMessage"]["role"] == "user"
        assert data["userMessage"]["content"] == "Any UK scholarships?"
        assert data["aiMessage"]["role"] == "assistant"
        assert data["aiMessage"]["content"] == "Consider the Chevening scholarship."
        assert data["suggestedTasks"] == []
        assert "Any UK scholarships?" in llm.prompts[-1]

        detail = await client.get(f"/chat/{chat['id']}", headers=auth_headers)
        assert [m["role"] for m in detail.json()["chat"]["messages"]] == ["user", "assistant"]

    async def test_assistant_message_is_stored_without_reply(self, client: AsyncClient, auth_headers, llm):
        chat = await _create_chat(client, auth_headers)
        response = await client.post(
            f"/chat/{chat['id']}/messages",
            json={"role": "assistant", "content": "Welcome back!"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["userMessage"]["role"] == "assistant"
        assert "aiMessage" not in data
        assert llm.prompts == []

    async def test_model_failure_answers_with_apology(self, client: AsyncClient, auth_headers, llm):
        chat = await _create_chat(client, auth_headers)
        llm.queue(RuntimeError("quota exceeded"))

        response = await client.post(f"/chat/{chat['id']}/messages", json={"content": "Hello"}, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["aiMessage"]["content"] == CHAT_ERROR_RESPONSE

    async def test_history_is_sent_to_the_model(self, client: AsyncClient, auth_headers, llm):
        chat = await _create_chat(client, auth_headers)
        llm.queue("First answer", "Second answer")
        await client.post(f"/chat/{chat['id']}/messages", json={"content": "First question"}, headers=auth_headers)
        await client.post(f"/chat/{chat['id']}/messages", json={"content": "Second question"}, headers=auth_headers)

        assert "First answer" in llm.prompts[-1]

        messages = await client.get(f"/chat/{chat['id']}/messages", headers=auth_headers)
        assert [m["content"] for m in messages.json()["messages"]] == [
            "First question",
            "First answer",
            "Second question",
            "Second answer",
        ]

    @pytest.mark.parametrize(
        "body,error",
        [
            ({"content": ""}, "Message content is required"),
            ({"content": "x" * 10001}, "Message is too long (max 10000 characters)"),
            ({"content": "Hi", "role": "system"}, "Invalid message role (must be 'user' or 'assistant')"),
        ],
    )
    async def test_invalid_messages(self, client: AsyncClient, auth_headers, body, error):
        chat = await _create_chat(client, auth_headers)
        response = await client.post(f"/chat/{chat['id']}/messages", json=body, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": error}
