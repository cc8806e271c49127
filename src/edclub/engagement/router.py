"""Engagement endpoints: weekly progress and ranking."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from edclub.auth.dependencies import AuthContext, require_auth
from edclub.engagement.schemas import ProgressResponse, RankResponse
from edclub.engagement.service import clamp_percent, get_weekly_progress, get_weekly_rank

router = APIRouter(prefix="/api/engagement", tags=["Engagement"])


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(auth: AuthContext = Depends(require_auth)):
    """The caller's attendance progress for the current week."""
    progress = await get_weekly_progress(auth.db, auth.user.id)
    return ProgressResponse(progress=progress)


@router.get("/rank", response_model=RankResponse)
async def get_rank(auth: AuthContext = Depends(require_auth)):
    """Weekly ranking across the cohort. Percent is clamped for display only."""
    rank = await get_weekly_rank(auth.db)
    return RankResponse(
        rank=[entry.model_copy(update={"percent": clamp_percent(entry.percent)}) for entry in rank],
    )
