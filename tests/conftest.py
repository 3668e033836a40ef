"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite file, an in-process HTTP
client, and a helper for minting tokens through the dev endpoint.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import httpx
import pytest_asyncio
from fastapi import FastAPI

from stationery_connect.api.app import create_app
from stationery_connect.settings import Settings

Headers = dict[str, str]


@pytest_asyncio.fixture
async def app(tmp_path: Path) -> AsyncIterator[FastAPI]:
    settings = Settings(env="test", database_url=f"sqlite+aiosqlite:///{tmp_path / 'sc.db'}")
    app = create_app(settings=settings)
    # httpx ASGITransport does not run lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def login(
    client: httpx.AsyncClient,
) -> Callable[..., Awaitable[Headers]]:
    async def _login(subject: str, *, tenant_id: str = "t1", role: str = "user") -> Headers:
        r = await client.post(
            "/v1/dev/token",
            json={"subject": subject, "tenant_id": tenant_id, "role": role},
        )
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _login
