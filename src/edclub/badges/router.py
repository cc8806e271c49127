"""Badge endpoints: /api/badges."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from edclub.auth.dependencies import AuthContext, require_auth, require_teacher, require_teacher_role
from edclub.badges.schemas import (
    BadgesResponse,
    CatalogBadgeResponse,
    GrantBadgeRequest,
    GrantBadgeResponse,
)
from edclub.badges.service import grant_badge, list_badges_for_user
from edclub.shared import BadgeAssignmentDTO

router = APIRouter(prefix="/api/badges", tags=["Badges"])


@router.get("", response_model=BadgesResponse)
async def get_badges(
    user_id: str | None = Query(None, alias="userId"),
    auth: AuthContext = Depends(require_auth),
):
    """Badge catalog with the target user's award times.

    Defaults to the caller; looking at someone else's badges needs the teacher role.
    """
    target = user_id or auth.user.id
    if target != auth.user.id:
        require_teacher_role(auth.user)

    rows = await list_badges_for_user(auth.db, target)
    return BadgesResponse(
        badges=[
            CatalogBadgeResponse(
                id=badge.id,
                name=badge.name,
                rule=badge.rule,
                icon_url=badge.icon_url,
                awarded_at=awarded_at,
            )
            for badge, awarded_at in rows
        ]
    )


@router.post("", response_model=GrantBadgeResponse)
async def post_badge(
    body: GrantBadgeRequest,
    auth: AuthContext = Depends(require_teacher),
):
    """Grant a badge to a user (teachers only). Re-granting is not an error."""
    assignment = await grant_badge(auth.db, str(body.user_id), str(body.badge_id), granted_by=auth.user.id)
    return GrantBadgeResponse(assignment=BadgeAssignmentDTO.model_validate(assignment))
