"""DTOs and enums shared by the API layer and the client modules.

DTOs are the camelCase, client-facing shapes of each entity. Field names stay
snake_case in Python; the camelCase keys only exist on the wire.
"""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Role(str, enum.Enum):
    """Role claim carried by every user."""

    STUDENT = "student"
    TEACHER = "teacher"

    @classmethod
    def parse(cls, value: object) -> Role | None:
        """Return the matching role, or None for anything unrecognised."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class AttendanceStatus(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class DTO(BaseModel):
    """Base for wire shapes: camelCase aliases, accepts snake_case too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserDTO(DTO):
    id: str
    email: str
    role: Role | None = None
    created_at: datetime | None = None

    @field_validator("role", mode="before")
    @classmethod
    def known_role(cls, v: object) -> Role | None:
        """Unknown role claims mean no role."""
        return None if v is None else Role.parse(v)


class SessionDTO(DTO):
    access_token: str
    refresh_token: str
    expires_at: int


class EventDTO(DTO):
    id: str
    team_id: str | None = None
    title: str
    starts_at: datetime
    ends_at: datetime


class AttendanceDTO(DTO):
    id: str
    event_id: str
    user_id: str
    status: AttendanceStatus
    created_at: datetime


class PostDTO(DTO):
    id: str
    user_id: str
    content: str
    created_at: datetime


class BadgeDTO(DTO):
    """A catalog badge as the client presents it; `earned_at` is None until awarded."""

    id: str
    name: str
    description: str = ""
    icon_url: str | None = None
    earned_at: datetime | None = None


class BadgeAssignmentDTO(DTO):
    user_id: str
    badge_id: str
    awarded_at: datetime


class WeeklyProgressDTO(DTO):
    presents: int = 0
    total: int = 0
    percent: float = 0.0


class RankEntryDTO(DTO):
    user_id: str
    presents: int = 0
    total: int = 0
    percent: float = 0.0
