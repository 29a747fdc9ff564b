"""Unit tests for the health, version and welcome endpoints."""

import pytest
from httpx import AsyncClient

from abroadly import __version__

pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_version(client: AsyncClient):
    response = await client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": __version__, "schema_version": "v1"}


async def test_welcome(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    assert "Abroadly" in response.json()["message"]
