"""Default badge catalog. Awarding stays manual; `rule` is guidance for teachers."""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from edclub.database import dialect_insert
from edclub.db.models import Badge

logger = structlog.get_logger()

BADGE_SEED_DATA: list[dict] = [
    {
        "name": "First Check-in",
        "rule": "Marked present at an event for the first time",
    },
    {
        "name": "Perfect Week",
        "rule": "Present at every event of a week (100% weekly progress)",
    },
    {
        "name": "Always On Time",
        "rule": "Four weeks in a row without a late or absent mark",
    },
    {
        "name": "Top of the Class",
        "rule": "First place in the weekly attendance ranking",
    },
    {
        "name": "Storyteller",
        "rule": "Shared ten posts on the class feed",
    },
    {
        "name": "Team Player",
        "rule": "Awarded by a teacher for helping classmates",
    },
]


async def seed_badges(db: AsyncSession) -> int:
    """Upsert the default catalog by name. Returns number of badges seeded."""
    seeded = 0
    for badge_data in BADGE_SEED_DATA:
        stmt = dialect_insert(db, Badge).values(**badge_data)
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={"rule": stmt.excluded.rule},
        )
        await db.execute(stmt)
        seeded += 1

    await db.commit()
    logger.info("badges_seeded", count=seeded)
    return seeded
