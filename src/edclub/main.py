"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from edclub.attendance.router import router as attendance_router
from edclub.auth.router import router as auth_router
from edclub.badges.router import router as badges_router
from edclub.badges.seed import seed_badges
from edclub.config import get_settings
from edclub.database import close_db, init_db, session_scope
from edclub.engagement.router import router as engagement_router
from edclub.events.router import router as events_router
from edclub.health.router import router as health_router
from edclub.middleware import setup_middleware
from edclub.posts.router import router as posts_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)

    # Seed the badge catalog (idempotent)
    try:
        async with session_scope() as db:
            await seed_badges(db)
    except SQLAlchemyError:
        logger.warning("badge_seeding_failed", hint="tables may not exist yet", exc_info=True)

    yield

    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="EDClub API",
        description="Backend API for EDClub (agenda, attendance, badges, weekly ranking and feed)",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(events_router)
    app.include_router(attendance_router)
    app.include_router(badges_router)
    app.include_router(posts_router)
    app.include_router(engagement_router)

    return app


app = create_app()
