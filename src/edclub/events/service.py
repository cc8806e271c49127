"""Agenda queries and event creation."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select

from edclub.db.models import Event

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def list_events(db: AsyncSession, team_id: str | None = None) -> list[Event]:
    """All events, optionally for one team, earliest first."""
    stmt = select(Event).order_by(Event.starts_at.asc(), Event.id.asc())
    if team_id:
        stmt = stmt.where(Event.team_id == team_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_upcoming_events(db: AsyncSession, limit: int, now: datetime | None = None) -> list[Event]:
    """The next `limit` events starting at or after `now`."""
    now = now or datetime.now(timezone.utc)
    result = await db.execute(
        select(Event)
        .where(Event.starts_at >= now)
        .order_by(Event.starts_at.asc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def create_event(
    db: AsyncSession,
    *,
    team_id: str | None,
    title: str,
    starts_at: datetime,
    ends_at: datetime,
    created_by: str,
) -> Event:
    """Insert an event and return the stored row."""
    event = Event(team_id=team_id, title=title, starts_at=starts_at, ends_at=ends_at)
    db.add(event)
    await db.commit()
    logger.info("event_created", event_id=event.id, team_id=team_id, created_by=created_by)
    return event
