"""Attendance endpoints: /api/attendance."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from edclub.attendance.schemas import AttendanceListResponse, AttendanceResponse, MarkAttendanceRequest
from edclub.attendance.service import list_attendances, upsert_attendance
from edclub.auth.dependencies import AuthContext, require_auth
from edclub.engagement.service import get_weekly_progress
from edclub.shared import AttendanceDTO

router = APIRouter(prefix="/api/attendance", tags=["Attendance"])


@router.get("", response_model=AttendanceListResponse)
async def get_attendance(
    event_id: str | None = Query(None, alias="eventId"),
    auth: AuthContext = Depends(require_auth),
):
    """The caller's attendance records (newest first) plus this week's progress."""
    attendances = await list_attendances(auth.db, auth.user.id, event_id=event_id)
    progress = await get_weekly_progress(auth.db, auth.user.id)
    return AttendanceListResponse(
        attendances=[AttendanceDTO.model_validate(a) for a in attendances],
        weekly_progress=progress,
    )


@router.post("", response_model=AttendanceResponse)
async def post_attendance(
    body: MarkAttendanceRequest,
    auth: AuthContext = Depends(require_auth),
):
    """Mark the caller's status for an event; re-marking updates in place."""
    attendance = await upsert_attendance(auth.db, auth.user.id, str(body.event_id), body.status)
    return AttendanceResponse(attendance=AttendanceDTO.model_validate(attendance))
