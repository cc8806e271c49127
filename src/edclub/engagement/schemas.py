"""Response schemas for engagement endpoints."""

from __future__ import annotations

from edclub.shared import DTO, RankEntryDTO, WeeklyProgressDTO


class ProgressResponse(DTO):
    progress: WeeklyProgressDTO


class RankResponse(DTO):
    rank: list[RankEntryDTO]
