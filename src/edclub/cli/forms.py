"""Client-side validation for the event form and the post composer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

MAX_POST_LENGTH = 500


class FormError(ValueError):
    """The first problem found in a form, phrased for the user."""


@dataclass(frozen=True)
class EventForm:
    team_id: str
    title: str
    starts_at: datetime
    ends_at: datetime


def parse_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are read as UTC. Returns None if unparseable."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def validate_event_form(
    team_id: str | None,
    title: str | None,
    starts_at: str | None,
    ends_at: str | None,
) -> EventForm:
    if not (title or "").strip():
        raise FormError("Enter a title for the event.")
    if not (starts_at or "").strip():
        raise FormError("Enter the start date and time.")
    if not (ends_at or "").strip():
        raise FormError("Enter the end date and time.")

    start = parse_datetime(starts_at)
    end = parse_datetime(ends_at)
    if start is None or end is None:
        raise FormError("Invalid dates. Check the values you entered.")
    if start > end:
        raise FormError("The end time must not be before the start time.")

    if not (team_id or "").strip():
        raise FormError("A team is required to create an event.")

    return EventForm(team_id=team_id.strip(), title=title.strip(), starts_at=start, ends_at=end)


def validate_post(content: str | None) -> str:
    trimmed = (content or "").strip()
    if not trimmed:
        raise FormError("Write something before publishing.")
    if len(trimmed) > MAX_POST_LENGTH:
        raise FormError(f"Posts are limited to {MAX_POST_LENGTH} characters.")
    return trimmed
