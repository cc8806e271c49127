"""Attendance records: listing and the single-statement upsert."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select

from edclub.database import dialect_insert
from edclub.db.models import Attendance
from edclub.shared import AttendanceStatus

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def list_attendances(db: AsyncSession, user_id: str, event_id: str | None = None) -> list[Attendance]:
    """A user's attendance records, newest first."""
    stmt = (
        select(Attendance)
        .where(Attendance.user_id == user_id)
        .order_by(Attendance.created_at.desc(), Attendance.id.desc())
    )
    if event_id:
        stmt = stmt.where(Attendance.event_id == event_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def upsert_attendance(
    db: AsyncSession,
    user_id: str,
    event_id: str,
    status: AttendanceStatus,
) -> Attendance:
    """
    Record the user's status for an event.

    A single INSERT ... ON CONFLICT (user_id, event_id) DO UPDATE, so concurrent
    submissions for the same pair can never produce two rows. A repeat
    submission only changes `status`; `created_at` keeps the first value.
    """
    stmt = dialect_insert(db, Attendance).values(
        user_id=user_id,
        event_id=event_id,
        status=status.value,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "event_id"],
        set_={"status": stmt.excluded.status},
    )
    result = await db.scalars(
        stmt.returning(Attendance),
        execution_options={"populate_existing": True},
    )
    attendance = result.one_or_none()
    if attendance is None:
        msg = "Attendance upsert returned no data"
        raise RuntimeError(msg)
    await db.commit()

    logger.info("attendance_upserted", user_id=user_id, event_id=event_id, status=status.value)
    return attendance
