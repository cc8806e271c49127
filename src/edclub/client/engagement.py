"""Weekly progress and ranking."""

from __future__ import annotations

from edclub.client.http import ApiClient
from edclub.shared import RankEntryDTO, WeeklyProgressDTO


async def get_progress(api: ApiClient) -> WeeklyProgressDTO:
    payload = await api.request("GET", "/api/engagement/progress")
    return WeeklyProgressDTO.model_validate(payload.get("progress") or {})


async def get_rank(api: ApiClient) -> list[RankEntryDTO]:
    payload = await api.request("GET", "/api/engagement/rank")
    return [RankEntryDTO.model_validate(row) for row in payload.get("rank", [])]
