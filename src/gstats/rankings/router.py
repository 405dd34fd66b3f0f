"""Public leaderboards: players and alliances."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from gstats.dependencies import get_ranking_service
from gstats.rankings.schemas import (
    ALLIANCE_SORT_FIELDS,
    PLAYER_SORT_FIELDS,
    AllianceRankingEntry,
    AllianceSortBy,
    PlayerRankingEntry,
    PlayerSortBy,
    SortOrder,
)
from gstats.rankings.service import RankingService

router = APIRouter(prefix="/api/rankings", tags=["Rankings"])


@router.get("/players", response_model=list[PlayerRankingEntry])
async def player_rankings(
    server: str | None = None,
    alliance: str | None = None,
    sort_by: PlayerSortBy = Query("powerNow", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    rankings: RankingService = Depends(get_ranking_service),
) -> list[PlayerRankingEntry]:
    """All players, optionally filtered by server and alliance."""
    players = await rankings.rank_players(
        server=server,
        alliance=alliance,
        sort_by=PLAYER_SORT_FIELDS[sort_by],  # type: ignore[arg-type]
        sort_order=sort_order,
    )
    return [PlayerRankingEntry.model_validate(p) for p in players]


@router.get("/alliances", response_model=list[AllianceRankingEntry])
async def alliance_rankings(
    server: str | None = None,
    sort_by: AllianceSortBy = Query("totalPower", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    rankings: RankingService = Depends(get_ranking_service),
) -> list[AllianceRankingEntry]:
    """All alliance aggregates, optionally filtered by server."""
    alliances = await rankings.rank_alliances(
        server=server,
        sort_by=ALLIANCE_SORT_FIELDS[sort_by],  # type: ignore[arg-type]
        sort_order=sort_order,
    )
    return [AllianceRankingEntry.model_validate(a) for a in alliances]
