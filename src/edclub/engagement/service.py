"""Weekly progress and ranking.

Both aggregates run in the database over the current ISO week of attendance
records (by `created_at`, UTC). Only `present` counts towards `presents`;
`late` and `absent` still count towards `total`.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import case, func, select

from edclub.db.models import Attendance
from edclub.engagement.week_utils import week_label, week_window
from edclub.shared import AttendanceStatus, RankEntryDTO, WeeklyProgressDTO

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

_PRESENTS = func.coalesce(
    func.sum(case((Attendance.status == AttendanceStatus.PRESENT.value, 1), else_=0)),
    0,
)
_TOTAL = func.count(Attendance.id)


def to_number(value: object) -> float:
    """Coerce a nullable / string / Decimal aggregate into a float (0 when unusable)."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError):
        return 0.0


def compute_percent(presents: int, total: int) -> float:
    """Share of presents, 0..100 with two decimals; 0 when there is nothing to count."""
    if total <= 0:
        return 0.0
    return round(presents * 100 / total, 2)


def clamp_percent(value: float) -> float:
    """Clamp a percentage into [0, 100] for display; NaN becomes 0."""
    if value != value:  # NaN
        return 0.0
    return min(100.0, max(0.0, value))


def rank_sort_key(entry: RankEntryDTO) -> tuple[float, int, str]:
    """Percent desc, then presents desc, then user id asc."""
    return (-entry.percent, -entry.presents, entry.user_id)


def sort_rank(entries: list[RankEntryDTO]) -> list[RankEntryDTO]:
    return sorted(entries, key=rank_sort_key)


def progress_from_row(presents: object, total: object) -> WeeklyProgressDTO:
    """Build a progress DTO from raw aggregate values."""
    presents_n = int(to_number(presents))
    total_n = int(to_number(total))
    return WeeklyProgressDTO(
        presents=presents_n,
        total=total_n,
        percent=compute_percent(presents_n, total_n),
    )


async def get_weekly_progress(db: AsyncSession, user_id: str, now: datetime | None = None) -> WeeklyProgressDTO:
    """The caller's presents/total/percent for the current week; zeros when empty."""
    start, end = week_window(now)
    result = await db.execute(
        select(_PRESENTS.label("presents"), _TOTAL.label("total")).where(
            Attendance.user_id == user_id,
            Attendance.created_at >= start,
            Attendance.created_at < end,
        )
    )
    row = result.one_or_none()
    if row is None:
        return WeeklyProgressDTO()
    return progress_from_row(row.presents, row.total)


async def get_weekly_rank(db: AsyncSession, now: datetime | None = None) -> list[RankEntryDTO]:
    """One entry per user with attendance this week, best first."""
    start, end = week_window(now)
    result = await db.execute(
        select(
            Attendance.user_id,
            _PRESENTS.label("presents"),
            _TOTAL.label("total"),
        )
        .where(Attendance.created_at >= start, Attendance.created_at < end)
        .group_by(Attendance.user_id)
    )

    entries = []
    for row in result:
        progress = progress_from_row(row.presents, row.total)
        entries.append(RankEntryDTO(user_id=str(row.user_id), **progress.model_dump()))

    logger.debug("weekly_rank_computed", week=week_label(start), participants=len(entries))
    return sort_rank(entries)
