"""Agenda endpoints: /api/events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from edclub.auth.dependencies import AuthContext, require_auth, require_teacher
from edclub.events.schemas import CreateEventRequest, CreateEventResponse, EventsResponse
from edclub.events.service import create_event, list_events
from edclub.shared import EventDTO

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=EventsResponse)
async def get_events(
    team_id: str | None = Query(None, alias="teamId"),
    auth: AuthContext = Depends(require_auth),
):
    """List the agenda, optionally filtered by team, ordered by start time."""
    events = await list_events(auth.db, team_id=team_id)
    return EventsResponse(events=[EventDTO.model_validate(e) for e in events])


@router.post("", response_model=CreateEventResponse)
async def post_event(
    body: CreateEventRequest,
    auth: AuthContext = Depends(require_teacher),
):
    """Create an event (teachers only)."""
    event = await create_event(
        auth.db,
        team_id=str(body.team_id),
        title=body.title,
        starts_at=body.starts_at,
        ends_at=body.ends_at,
        created_by=auth.user.id,
    )
    return CreateEventResponse(event=EventDTO.model_validate(event))
