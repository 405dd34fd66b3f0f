"""Ranking queries over profiles and alliance aggregates.

Sorting is stable: entries with equal keys keep store order (creation order).
Missing numeric values sort as 0.
"""

from __future__ import annotations

from typing import Literal

from gstats.alliances.engine import AllianceAggregate, AllianceAggregateEngine
from gstats.profiles.models import GameProfile
from gstats.profiles.service import ProfileService

PlayerSortField = Literal["power_now", "power_max", "level"]
AllianceSortField = Literal["total_power", "member_count", "average_power"]
SortOrder = Literal["asc", "desc"]


class RankingService:
    def __init__(self, profiles: ProfileService, alliances: AllianceAggregateEngine) -> None:
        self._profiles = profiles
        self._alliances = alliances

    async def rank_players(
        self,
        server: str | None = None,
        alliance: str | None = None,
        sort_by: PlayerSortField = "power_now",
        sort_order: SortOrder = "desc",
    ) -> list[GameProfile]:
        players = await self._profiles.list_profiles()
        if server:
            players = [p for p in players if p.server == server]
        if alliance:
            players = [p for p in players if p.alliance == alliance]

        return sorted(
            players,
            key=lambda p: getattr(p, sort_by) or 0,
            reverse=sort_order == "desc",
        )

    async def rank_alliances(
        self,
        server: str | None = None,
        sort_by: AllianceSortField = "total_power",
        sort_order: SortOrder = "desc",
    ) -> list[AllianceAggregate]:
        alliances = await self._alliances.all()
        if server:
            alliances = [a for a in alliances if a.server == server]

        return sorted(
            alliances,
            key=lambda a: getattr(a, sort_by) or 0,
            reverse=sort_order == "desc",
        )
