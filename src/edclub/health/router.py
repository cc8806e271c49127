"""Liveness, readiness and version probes (unauthenticated, outside /api)."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from edclub.config import get_settings
from edclub.database import get_session
from edclub.db.models import Badge

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_session)) -> JSONResponse:  # noqa: B008
    """Ready once the database answers and the badge catalog is seeded; 503 otherwise."""
    checks: dict[str, str] = {}
    try:
        badge_count = (await db.execute(select(func.count()).select_from(Badge))).scalar_one()
        checks["database"] = "ok"
        checks["badge_catalog"] = "ok" if badge_count else "empty"
    except SQLAlchemyError as exc:
        checks["database"] = f"error: {exc}"
        checks["badge_catalog"] = "unknown"

    ready = all(state == "ok" for state in checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "degraded", "checks": checks},
    )


@router.get("/version")
async def version() -> dict[str, str]:
    settings = get_settings()
    return {
        "service": "edclub-api",
        "version": settings.app_version,
        "environment": settings.environment,
    }
