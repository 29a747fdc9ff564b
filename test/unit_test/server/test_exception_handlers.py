"""Unit tests for the exception handlers."""

import pytest
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from abroadly.server.exception_handlers import setup_exception_handlers

pytestmark = pytest.mark.asyncio


class Payload(BaseModel):
    count: int


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/conflict")
    async def conflict():
        raise HTTPException(status_code=409, detail="Already there")

    @app.post("/payload")
    async def payload(body: Payload):
        return body

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    return app


async def test_http_exception_body(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/conflict")
    assert response.status_code == 409
    assert response.json() == {"error": "Already there"}


async def test_validation_error_is_400(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/payload", json={"count": "many"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("count:")


async def test_unhandled_exception_is_500(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal server error"
    assert body["error_type"] == "RuntimeError"
    assert "error_id" in body
