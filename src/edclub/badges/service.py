"""Badge catalog queries and teacher grants."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import and_, func, select

from edclub.database import dialect_insert
from edclub.db.models import Badge, UserBadge

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def list_badges_for_user(db: AsyncSession, user_id: str) -> list[tuple[Badge, datetime | None]]:
    """The full catalog by name, each paired with the user's award time or None."""
    result = await db.execute(
        select(Badge, UserBadge.awarded_at)
        .outerjoin(
            UserBadge,
            and_(UserBadge.badge_id == Badge.id, UserBadge.user_id == user_id),
        )
        .order_by(Badge.name.asc())
    )
    return [(row.Badge, row.awarded_at) for row in result]


async def count_user_badges(db: AsyncSession, user_id: str) -> int:
    """Number of badges awarded to a user."""
    result = await db.execute(
        select(func.count()).select_from(UserBadge).where(UserBadge.user_id == user_id)
    )
    return result.scalar_one()


async def grant_badge(db: AsyncSession, user_id: str, badge_id: str, granted_by: str) -> UserBadge:
    """
    Award a badge, keyed on (user_id, badge_id).

    Re-granting is a no-op overwrite of the key columns: no duplicate row, no
    error, and `awarded_at` keeps the first grant's timestamp.
    """
    stmt = dialect_insert(db, UserBadge).values(user_id=user_id, badge_id=badge_id)
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "badge_id"],
        set_={"badge_id": stmt.excluded.badge_id},
    )
    result = await db.scalars(
        stmt.returning(UserBadge),
        execution_options={"populate_existing": True},
    )
    assignment = result.one_or_none()
    if assignment is None:
        msg = "Badge grant returned no data"
        raise RuntimeError(msg)
    await db.commit()

    logger.info("badge_granted", user_id=user_id, badge_id=badge_id, granted_by=granted_by)
    return assignment
