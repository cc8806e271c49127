"""Health, readiness and version endpoints."""

from httpx import AsyncClient
from sqlalchemy import delete

from edclub.database import session_scope
from edclub.db.models import Badge


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_ready_when_seeded(client: AsyncClient) -> None:
    response = await client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"database": "ok", "badge_catalog": "ok"}}


async def test_not_ready_without_badge_catalog(client: AsyncClient) -> None:
    async with session_scope() as db:
        await db.execute(delete(Badge))
        await db.commit()

    response = await client.get("/ready")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    assert data["checks"]["badge_catalog"] == "empty"


async def test_version(client: AsyncClient) -> None:
    response = await client.get("/version")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "edclub-api"
    assert data["environment"] == "test"
    assert data["version"]
