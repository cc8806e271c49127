"""Request/response schemas for badge endpoints."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from edclub.shared import DTO, BadgeAssignmentDTO


class CatalogBadgeResponse(DTO):
    """Catalog entry joined with the target user's award time (None if not earned)."""

    id: str
    name: str
    rule: str | None = None
    icon_url: str | None = None
    awarded_at: datetime | None = None


class BadgesResponse(DTO):
    badges: list[CatalogBadgeResponse]


class GrantBadgeRequest(DTO):
    user_id: UUID
    badge_id: UUID


class GrantBadgeResponse(DTO):
    assignment: BadgeAssignmentDTO
