"""Game profile record."""

from __future__ import annotations

from dataclasses import dataclass

# Fields a game-data submission may change on an existing profile.
MUTABLE_FIELDS = (
    "character_id",
    "nickname",
    "server",
    "alliance",
    "level",
    "power_now",
    "power_max",
    "hidden_power",
)


@dataclass(frozen=True)
class GameProfile:
    id: int
    user_id: int
    character_id: str
    nickname: str
    server: str | None = None
    alliance: str | None = None
    level: int | None = None
    power_now: int | None = None
    power_max: int | None = None
    hidden_power: int | None = None
