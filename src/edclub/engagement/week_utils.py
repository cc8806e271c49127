"""Week window for progress and ranking: ISO weeks, Monday to Monday, in UTC."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

WEEK = timedelta(days=7)


def week_label(moment: datetime) -> str:
    """ISO year and week, e.g. '2026-W10'."""
    year, week, _ = moment.isocalendar()
    return f"{year}-W{week:02d}"


def week_start(day: date) -> date:
    """The Monday on or before `day`."""
    return day - timedelta(days=day.weekday())


def week_window(moment: datetime | None = None) -> tuple[datetime, datetime]:
    """Half-open `[start, end)` of the UTC week containing `moment` (default: now).

    Naive timestamps are read as UTC. Aware ones are converted first, so an
    early-Monday time in a zone ahead of UTC still belongs to the previous week.
    """
    moment = moment or datetime.now(timezone.utc)
    moment = moment.replace(tzinfo=timezone.utc) if moment.tzinfo is None else moment.astimezone(timezone.utc)
    start = datetime.combine(week_start(moment.date()), time.min, tzinfo=timezone.utc)
    return start, start + WEEK
