"""Response schemas and query vocabularies for ranking endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gstats.profiles.schemas import GameProfileResponse

PlayerSortBy = Literal["powerNow", "powerMax", "level"]
AllianceSortBy = Literal["totalPower", "memberCount", "averagePower"]
SortOrder = Literal["asc", "desc"]

PLAYER_SORT_FIELDS: dict[str, str] = {
    "powerNow": "power_now",
    "powerMax": "power_max",
    "level": "level",
}
ALLIANCE_SORT_FIELDS: dict[str, str] = {
    "totalPower": "total_power",
    "memberCount": "member_count",
    "averagePower": "average_power",
}


class PlayerRankingEntry(GameProfileResponse):
    pass


class AllianceRankingEntry(BaseModel):
    """An alliance aggregate with its derived average power."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    server: str
    member_count: int
    total_power: int
    average_power: int
