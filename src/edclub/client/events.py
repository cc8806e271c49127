"""Agenda and attendance operations."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from edclub.client.http import ApiClient
from edclub.shared import AttendanceDTO, AttendanceStatus, EventDTO, WeeklyProgressDTO


async def list_events(api: ApiClient, team_id: str | None = None) -> list[EventDTO]:
    """All events ordered by start time, optionally for one team."""
    payload = await api.request("GET", "/api/events", params={"teamId": team_id})
    return [EventDTO.model_validate(row) for row in payload.get("events", [])]


async def create_event(
    api: ApiClient,
    team_id: str,
    title: str,
    starts_at: datetime,
    ends_at: datetime,
) -> EventDTO:
    body = {
        "teamId": team_id,
        "title": title,
        "startsAt": starts_at.isoformat(),
        "endsAt": ends_at.isoformat(),
    }
    payload = await api.request("POST", "/api/events", body)
    return EventDTO.model_validate(payload["event"])


async def list_attendance(
    api: ApiClient,
    event_id: str | None = None,
) -> tuple[list[AttendanceDTO], WeeklyProgressDTO]:
    """The caller's attendance rows (newest first) and this week's progress."""
    payload = await api.request("GET", "/api/attendance", params={"eventId": event_id})
    rows = [AttendanceDTO.model_validate(row) for row in payload.get("attendances", [])]
    progress = payload.get("weeklyProgress") or payload.get("weekly_progress") or {}
    return rows, WeeklyProgressDTO.model_validate(progress)


async def mark_attendance(api: ApiClient, event_id: str, status: AttendanceStatus | str) -> AttendanceDTO:
    """Record or update the caller's status for an event."""
    body = {"eventId": event_id, "status": AttendanceStatus(status).value}
    payload = await api.request("POST", "/api/attendance", body)
    return AttendanceDTO.model_validate(payload["attendance"])


async def get_attendance_status(api: ApiClient, event_ids: Iterable[str]) -> dict[str, AttendanceStatus]:
    """Map each given event id to the caller's status; events without a record are omitted."""
    wanted = set(event_ids)
    if not wanted:
        return {}
    rows, _ = await list_attendance(api)
    return {row.event_id: row.status for row in rows if row.event_id in wanted}
