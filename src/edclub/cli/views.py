"""Text views.

Every view is a pure function of a `Slot`: a fetch that is still loading,
finished with a value, or failed with a message. Views never raise on bad
data; they render whatever state they are handed.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from edclub.shared import (
    AttendanceDTO,
    AttendanceStatus,
    BadgeDTO,
    EventDTO,
    PostDTO,
    RankEntryDTO,
    UserDTO,
    WeeklyProgressDTO,
)

T = TypeVar("T")

BAR_WIDTH = 20
TROPHY = "\N{TROPHY}"
STAR = "\N{BLACK STAR}"
UNKNOWN_USER = "Unknown user"


@dataclass
class Slot(Generic[T]):
    loading: bool = True
    value: T | None = None
    error: str | None = None

    @classmethod
    def ready(cls, value: T) -> Slot[T]:
        return cls(loading=False, value=value)

    @classmethod
    def failed(cls, message: str) -> Slot[T]:
        return cls(loading=False, error=message or "Request failed.")


def clamp_percent(value: float | None) -> float:
    if value is None or math.isnan(value):
        return 0.0
    return min(100.0, max(0.0, float(value)))


def display_percent(progress: WeeklyProgressDTO) -> float:
    """Percent as shown to the user: 0 with no events, otherwise clamped to [0, 100]."""
    if progress.total == 0:
        return 0.0
    return clamp_percent(progress.percent)


def short_id(identifier: str | None) -> str:
    if not identifier:
        return UNKNOWN_USER
    if len(identifier) > 16:
        return f"{identifier[:8]}\N{HORIZONTAL ELLIPSIS}{identifier[-4:]}"
    return identifier


def format_when(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")


def progress_bar(percent: float, width: int = BAR_WIDTH) -> str:
    filled = round(clamp_percent(percent) / 100 * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def _pending(slot: Slot, label: str) -> str | None:
    if slot.error is not None:
        return f"Could not load {label}: {slot.error}"
    if slot.loading:
        return f"Loading {label}..."
    return None


def render_progress(slot: Slot[WeeklyProgressDTO]) -> str:
    pending = _pending(slot, "weekly progress")
    if pending:
        return pending
    progress = slot.value or WeeklyProgressDTO()
    percent = display_percent(progress)
    return (
        f"Weekly progress: {percent:.1f}%\n"
        f"{progress_bar(percent)} {progress.presents}/{progress.total} present"
    )


def render_rank(slot: Slot[Sequence[RankEntryDTO]]) -> str:
    pending = _pending(slot, "weekly ranking")
    if pending:
        return pending
    entries = slot.value or []
    if not entries:
        return "No attendance recorded this week yet."

    lines = ["Weekly ranking"]
    for position, entry in enumerate(entries, start=1):
        marker = TROPHY if position == 1 else STAR
        lines.append(
            f"{position:>3}. {marker} {short_id(entry.user_id):<17} "
            f"{clamp_percent(entry.percent):5.1f}%  ({entry.presents}/{entry.total})"
        )
    return "\n".join(lines)


def render_agenda(
    slot: Slot[Sequence[EventDTO]],
    statuses: Mapping[str, AttendanceStatus] | None = None,
) -> str:
    pending = _pending(slot, "events")
    if pending:
        return pending
    events = slot.value or []
    if not events:
        return "No events scheduled."

    statuses = statuses or {}
    lines = []
    for event in events:
        line = f"{format_when(event.starts_at)} -> {format_when(event.ends_at)}  {event.title}  ({event.id})"
        status = statuses.get(event.id)
        if status is not None:
            line += f"  [{AttendanceStatus(status).value}]"
        lines.append(line)
    return "\n".join(lines)


def render_attendance(slot: Slot[Sequence[AttendanceDTO]]) -> str:
    pending = _pending(slot, "attendance")
    if pending:
        return pending
    rows = slot.value or []
    if not rows:
        return "No attendance recorded."
    return "\n".join(
        f"{format_when(row.created_at)}  {short_id(row.event_id):<17} {AttendanceStatus(row.status).value}"
        for row in rows
    )


def render_feed(slot: Slot[Sequence[PostDTO]]) -> str:
    pending = _pending(slot, "posts")
    if pending:
        return pending
    posts = slot.value or []
    if not posts:
        return "No posts yet. Be the first to share something."
    return "\n\n".join(
        f"{short_id(post.user_id)} - {format_when(post.created_at)}\n  {post.content}"
        for post in posts
    )


def render_badges(slot: Slot[Sequence[BadgeDTO]]) -> str:
    pending = _pending(slot, "badges")
    if pending:
        return pending
    badges = slot.value or []
    if not badges:
        return "No badges available."

    earned = sum(1 for b in badges if b.earned_at is not None)
    lines = [f"Badges ({earned}/{len(badges)} earned)"]
    for badge in badges:
        if badge.earned_at is not None:
            lines.append(f"  [x] {badge.name} - earned {format_when(badge.earned_at)}")
        else:
            lines.append(f"  [ ] {badge.name}")
        if badge.description:
            lines.append(f"      {badge.description}")
    return "\n".join(lines)


def render_user(user: UserDTO) -> str:
    role = user.role.value if user.role is not None else "no role"
    return f"{user.email} ({role})"


def render_registration(user: UserDTO, signed_in: bool) -> str:
    if signed_in:
        return f"Welcome, {render_user(user)}. You are signed in."
    return f"Account created for {user.email}. Check your email to confirm it, then log in."
