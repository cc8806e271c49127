"""Request/response schemas for attendance endpoints."""

from __future__ import annotations

from uuid import UUID

from edclub.shared import DTO, AttendanceDTO, AttendanceStatus, WeeklyProgressDTO


class MarkAttendanceRequest(DTO):
    event_id: UUID
    status: AttendanceStatus


class AttendanceListResponse(DTO):
    attendances: list[AttendanceDTO]
    weekly_progress: WeeklyProgressDTO


class AttendanceResponse(DTO):
    attendance: AttendanceDTO
