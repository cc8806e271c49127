"""Badge catalog and grants."""

from __future__ import annotations

from typing import Any

from edclub.client.http import ApiClient
from edclub.shared import BadgeAssignmentDTO, BadgeDTO


def badge_from_row(row: dict[str, Any]) -> BadgeDTO:
    """Catalog row (rule, awardedAt) to the presented badge (description, earnedAt)."""
    return BadgeDTO(
        id=row["id"],
        name=row["name"],
        description=row.get("rule") or "",
        icon_url=row.get("iconUrl", row.get("icon_url")),
        earned_at=row.get("awardedAt", row.get("awarded_at")),
    )


async def list_badges(api: ApiClient, user_id: str | None = None) -> list[BadgeDTO]:
    """Full catalog with earned flags for the caller, or for `user_id` (teachers only)."""
    payload = await api.request("GET", "/api/badges", params={"userId": user_id})
    return [badge_from_row(row) for row in payload.get("badges", [])]


async def grant_badge(api: ApiClient, user_id: str, badge_id: str) -> BadgeAssignmentDTO:
    payload = await api.request("POST", "/api/badges", {"userId": user_id, "badgeId": badge_id})
    return BadgeAssignmentDTO.model_validate(payload["assignment"])
