"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from gstats.config import get_settings
from gstats.main import create_app
from gstats.state import AppState, close_state, init_state

PASSWORD = "hunter2-Secret"


@pytest_asyncio.fixture
async def state() -> AsyncGenerator[AppState, None]:
    """A fresh in-memory service graph."""
    get_settings.cache_clear()
    yield await init_state(get_settings())
    await close_state()


@pytest_asyncio.fixture
async def app(state: AppState):
    """The application wired to the fresh state (ASGITransport skips lifespan)."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """An async HTTP test client. Keeps cookies, so it also carries sessions."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def anon_client(app) -> AsyncGenerator[AsyncClient, None]:
    """A second client with its own (empty) cookie jar."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_user(client: AsyncClient, username: str = "alice") -> dict:
    """Register a user and return the response body (includes the token)."""
    response = await client.post("/api/register", json={
        "username": username,
        "password": PASSWORD,
        "email": f"{username}@example.com",
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def registered_user(client: AsyncClient) -> dict:
    return await register_user(client)


@pytest_asyncio.fixture
async def token_client(anon_client: AsyncClient, registered_user: dict) -> AsyncClient:
    """A cookie-less client authenticated only by the bearer token."""
    anon_client.headers["Authorization"] = f"Bearer {registered_user['token']}"
    return anon_client


