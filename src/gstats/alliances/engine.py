"""Alliance aggregate engine.

An alliance aggregate is the running (member count, total power) of every
profile assigned to one (alliance, server) pair. Aggregates are never
recomputed from scratch: each profile mutation is turned into an ordered list
of ``AggregateDelta`` entries, planned from the profile as it was *before*
the mutation, and then applied.

Update planning follows two steps, in this order:

1. Migration. When the profile's (alliance, server) key changes, the old
   aggregate loses one member and the profile's pre-update power, and the new
   aggregate gains one member and that same pre-update power.
2. Power delta. When ``power_now`` changes and the profile ends up on an
   aggregate, that aggregate gets ``new_power - old_power``.

So moving from A to B while power goes 100 -> 150 gives
``A: -1/-100``, ``B: +1/+100``, ``B: +0/+50``.

Rows that drop to zero members are kept and still listed.
"""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

import structlog

from gstats.profiles.models import GameProfile
from gstats.stores.base import KeyValueStore

logger = structlog.get_logger()

AllianceKey = tuple[str, str]


@dataclass(frozen=True)
class AllianceAggregate:
    id: int
    name: str
    server: str
    member_count: int = 0
    total_power: int = 0

    @property
    def average_power(self) -> int:
        return average_power(self.total_power, self.member_count)


@dataclass(frozen=True)
class AggregateDelta:
    key: AllianceKey
    member_diff: int
    power_diff: int


def average_power(total_power: int, member_count: int) -> int:
    """floor(total / members), or 0 for an empty alliance."""
    if member_count <= 0:
        return 0
    return total_power // member_count


def alliance_key(alliance: str | None, server: str | None) -> AllianceKey | None:
    """The aggregate a profile counts towards, or None when either part is missing."""
    if not alliance or not server:
        return None
    return (alliance, server)


def plan_create(profile: GameProfile) -> list[AggregateDelta]:
    """Deltas for a newly created profile."""
    key = alliance_key(profile.alliance, profile.server)
    if key is None:
        return []
    return [AggregateDelta(key, 1, profile.power_now or 0)]


def plan_update(old: GameProfile, changes: Mapping[str, Any]) -> list[AggregateDelta]:
    """Deltas for applying ``changes`` (present fields only) to ``old``."""
    old_power = old.power_now or 0
    old_key = alliance_key(old.alliance, old.server)
    new_key = alliance_key(
        changes.get("alliance") or old.alliance,
        changes.get("server") or old.server,
    )

    deltas: list[AggregateDelta] = []
    if new_key != old_key:
        if old_key is not None:
            deltas.append(AggregateDelta(old_key, -1, -old_power))
        if new_key is not None:
            deltas.append(AggregateDelta(new_key, 1, old_power))

    new_power = changes.get("power_now")
    if new_power is not None and new_power != old.power_now and new_key is not None:
        deltas.append(AggregateDelta(new_key, 0, new_power - old_power))

    return deltas


class AllianceAggregateEngine:
    """Sole writer of alliance aggregates."""

    def __init__(self, store: KeyValueStore[AllianceKey, AllianceAggregate]) -> None:
        self._store = store
        self._ids = itertools.count(1)

    async def apply(self, deltas: list[AggregateDelta]) -> None:
        """Apply deltas in order, creating aggregates on first use."""
        for delta in deltas:
            aggregate = await self._store.get(delta.key)
            if aggregate is None:
                name, server = delta.key
                aggregate = AllianceAggregate(
                    id=next(self._ids),
                    name=name,
                    server=server,
                    member_count=delta.member_diff,
                    total_power=delta.power_diff,
                )
                logger.info("alliance_aggregate_created", alliance=name, server=server)
            else:
                aggregate = replace(
                    aggregate,
                    member_count=aggregate.member_count + delta.member_diff,
                    total_power=aggregate.total_power + delta.power_diff,
                )
            await self._store.put(delta.key, aggregate)

    async def get(self, alliance: str, server: str) -> AllianceAggregate | None:
        return await self._store.get((alliance, server))

    async def all(self) -> list[AllianceAggregate]:
        return await self._store.values()
