"""Fixtures for the database layer tests.

Repositories run against the per-test in-memory SQLite database from the
shared ``session`` fixture.
"""

from __future__ import annotations

import pytest_asyncio

from abroadly.core.database.entities import User
from abroadly.core.database.repositories import UserRepository


@pytest_asyncio.fixture
async def user(session) -> User:
    return await UserRepository(session).create(
        User(full_name="Test Student", email="student@example.com", password="not-a-real-hash")
    )


@pytest_asyncio.fixture
async def other_user(session) -> User:
    return await UserRepository(session).create(
        User(full_name="Other Student", email="other@example.com", password="not-a-real-hash")
    )
