"""Shared test fixtures."""

from __future__ import annotations

import os

# Every test runs against a private in-memory SQLite database.
os.environ["EDCLUB_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["EDCLUB_ENVIRONMENT"] = "test"
# Cheap argon2 parameters keep registration fast in tests
os.environ["EDCLUB_PASSWORD_HASH_TIME_COST"] = "1"
os.environ["EDCLUB_PASSWORD_HASH_MEMORY_KIB"] = "8192"

from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from edclub.auth.provider import set_user_role
from edclub.badges.seed import seed_badges
from edclub.client.config import ClientSettings
from edclub.client.http import ApiClient
from edclub.client.session import SessionStore, SessionTokens
from edclub.config import get_settings
from edclub.database import close_db, create_schema, init_db, session_scope
from edclub.db.models import Event, Team
from edclub.main import create_app
from edclub.shared import Role

get_settings.cache_clear()

DEFAULT_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over a fresh app and an empty, seeded database."""
    app = create_app()
    await init_db(get_settings().database_url)
    await create_schema()
    async with session_scope() as db:
        await seed_badges(db)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await close_db()


async def register_user(client: AsyncClient, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Register through the API. Returns id, credentials and auth headers."""
    response = await client.post("/api/auth/register", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    data = response.json()
    token = data["session"]["accessToken"]
    return {
        "id": data["user"]["id"],
        "email": email,
        "password": password,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest_asyncio.fixture
async def student(client: AsyncClient) -> dict:
    return await register_user(client, "student@school.edu")


@pytest_asyncio.fixture
async def other_student(client: AsyncClient) -> dict:
    return await register_user(client, "classmate@school.edu")


@pytest_asyncio.fixture
async def teacher(client: AsyncClient) -> dict:
    user = await register_user(client, "teacher@school.edu")
    async with session_scope() as db:
        await set_user_role(db, user["email"], Role.TEACHER)
    return user


@pytest_asyncio.fixture
async def team_id(client: AsyncClient) -> str:
    async with session_scope() as db:
        team = Team(name="Class 3B")
        db.add(team)
        await db.commit()
        return team.id


async def insert_event(team_id: str | None, title: str, starts_at: datetime, hours: int = 1) -> str:
    """Insert an event row directly and return its id."""
    async with session_scope() as db:
        event = Event(team_id=team_id, title=title, starts_at=starts_at, ends_at=starts_at + timedelta(hours=hours))
        db.add(event)
        await db.commit()
        return event.id


@pytest.fixture
def tomorrow() -> datetime:
    return (datetime.now(timezone.utc) + timedelta(days=1)).replace(microsecond=0)


# ---------------------------------------------------------------------------
# Client fixtures: an ApiClient wired to an in-process mock backend
# ---------------------------------------------------------------------------


class Backend:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, status: int = 200, json=None) -> None:  # noqa: ANN001
        self.routes[(method, path)] = lambda _request: httpx.Response(status, json=json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Not Found"})
        return route(request)


@pytest.fixture
def backend() -> Backend:
    return Backend()


@pytest.fixture
def store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def signed_in(store: SessionStore) -> SessionTokens:
    tokens = SessionTokens(access_token="access-1", refresh_token="refresh-1", expires_at=1_900_000_000)
    store.save(tokens)
    return tokens


@pytest_asyncio.fixture
async def api(backend: Backend, store: SessionStore, tmp_path: Path) -> AsyncGenerator[ApiClient, None]:
    settings = ClientSettings(backend_url="http://edclub.test", session_path=tmp_path / "session.json")
    async with ApiClient(settings=settings, store=store, transport=httpx.MockTransport(backend.handler)) as client:
        yield client
