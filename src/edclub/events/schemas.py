"""Request/response schemas for the agenda endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from pydantic import StringConstraints, ValidationInfo, field_validator

from edclub.shared import DTO, EventDTO


class CreateEventRequest(DTO):
    """Teacher-only event creation. Timestamps are stored in UTC."""

    team_id: UUID
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    starts_at: datetime
    ends_at: datetime

    @field_validator("starts_at", "ends_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Normalise to UTC; naive timestamps are read as UTC."""
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v.astimezone(timezone.utc)

    @field_validator("ends_at")
    @classmethod
    def ends_after_start(cls, v: datetime, info: ValidationInfo) -> datetime:
        """Reject events that end before they start."""
        starts_at = info.data.get("starts_at")
        if starts_at is not None and v < starts_at:
            msg = "endsAt must not be earlier than startsAt"
            raise ValueError(msg)
        return v


class EventsResponse(DTO):
    events: list[EventDTO]


class CreateEventResponse(DTO):
    event: EventDTO
