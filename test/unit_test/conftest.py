"""Shared fixtures for unit tests.

Every test gets its own in-memory SQLite database with the full schema, an
``AIService`` backed by a scripted Pydantic AI ``FunctionModel`` and an HTTP
client talking to the app through ASGI with both injected.
"""

from __future__ import annotations

from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, List, Union

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from abroadly.core.database import create_all, create_sessionmaker
from abroadly.core.database.repositories import ScholarshipRepository, UniversityRepository
from abroadly.scripts.seed import DEFAULT_DATA_FILE, load_catalogue, seed_catalogue
from abroadly.server.services.ai_service import AIService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class ScriptedReplies:
    """Model function answering prompts with queued replies.

    Queued exceptions are raised instead of answered. With nothing queued
    the model answers ``"OK"``. Every prompt received is recorded.
    """

    def __init__(self) -> None:
        self.replies: List[Union[str, Exception]] = []
        self.prompts: List[str] = []

    def queue(self, *replies: Union[str, Exception]) -> None:
        self.replies.extend(replies)

    def __call__(self, messages: List[ModelMessage], info: AgentInfo) -> ModelResponse:
        for part in messages[-1].parts:
            if isinstance(part, UserPromptPart) and isinstance(part.content, str):
                self.prompts.append(part.content)
        reply = self.replies.pop(0) if self.replies else "OK"
        if isinstance(reply, Exception):
            raise reply
        return ModelResponse(parts=[TextPart(content=reply)])


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def llm() -> ScriptedReplies:
    return ScriptedReplies()


@pytest.fixture
def ai_service(llm: ScriptedReplies) -> AIService:
    return AIService(model=FunctionModel(llm))


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, ai_service: AIService) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden database and AI dependencies."""
    from abroadly.core.database import get_session
    from abroadly.server.main import app
    from abroadly.server.services.ai_service import get_ai_service

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_ai_service] = lambda: ai_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def catalogue(session: AsyncSession) -> Dict[str, Any]:
    """Seed the bundled catalogue and return the universities and scholarships by name."""
    await seed_catalogue(session, load_catalogue(DEFAULT_DATA_FILE))
    universities = {u.name: u for u in await UniversityRepository(session).list_all()}
    scholarships = {s.name: s for s in await ScholarshipRepository(session).list()}
    return {"universities": universities, "scholarships": scholarships}


@pytest.fixture
def register_user(client: AsyncClient) -> Callable[..., Awaitable[Dict[str, str]]]:
    """Factory registering an account and returning its bearer auth headers."""

    async def _register(email: str = "student@example.com", full_name: str = "Test Student") -> Dict[str, str]:
        response = await client.post(
            "/auth/register", json={"fullName": full_name, "email": email, "password": "secret123"}
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest_asyncio.fixture
async def auth_headers(register_user) -> Dict[str, str]:
    return await register_user()
