"""
Profile store: one game profile per user.

Every write goes through a ``ProfileMutation``: the new profile plus the
aggregate deltas planned from the previous one. A mutation is committed under
a single lock, so the profile row and the alliance aggregates always move
together and no other writer sees a half-applied update.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

import structlog

from gstats.alliances.engine import (
    AggregateDelta,
    AllianceAggregateEngine,
    plan_create,
    plan_update,
)
from gstats.errors import NotFound
from gstats.profiles.models import MUTABLE_FIELDS, GameProfile
from gstats.stores.base import KeyValueStore

logger = structlog.get_logger()

# A blank server or alliance is "not supplied", same as None.
_BLANK_IS_MISSING = ("server", "alliance")


@dataclass(frozen=True)
class ProfileMutation:
    profile: GameProfile
    deltas: list[AggregateDelta] = field(default_factory=list)
    created: bool = False


class ProfileService:
    def __init__(
        self,
        store: KeyValueStore[int, GameProfile],
        engine: AllianceAggregateEngine,
    ) -> None:
        self._store = store
        self._engine = engine
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    # ---------------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------------

    async def get_for_user(self, user_id: int) -> GameProfile | None:
        return await self._store.get(user_id)

    async def list_profiles(self) -> list[GameProfile]:
        """All profiles in creation order."""
        return await self._store.values()

    # ---------------------------------------------------------------------------
    # Mutations
    # ---------------------------------------------------------------------------

    async def submit_game_data(self, user_id: int, data: Mapping[str, Any]) -> ProfileMutation:
        """
        Create the user's profile, or update it with the present fields of ``data``.

        ``data`` uses snake_case profile field names; None values and blank
        server or alliance strings mean "not supplied".
        """
        changes = _present(data)
        async with self._lock:
            existing = await self._store.get(user_id)
            if existing is None:
                mutation = self._plan_create(user_id, changes)
            else:
                mutation = _plan_update(existing, changes)
            await self._commit(mutation)
        return mutation

    async def update_alliance(self, user_id: int, alliance: str | None) -> ProfileMutation:
        """
        Move the user's profile to another alliance on its current server.

        Raises:
            NotFound: If the user has no profile yet.
        """
        async with self._lock:
            existing = await self._store.get(user_id)
            if existing is None:
                raise NotFound("Profile not found")
            mutation = _plan_update(existing, _present({"alliance": alliance}))
            await self._commit(mutation)
        return mutation

    def _plan_create(self, user_id: int, changes: Mapping[str, Any]) -> ProfileMutation:
        profile = GameProfile(id=next(self._ids), user_id=user_id, **changes)
        return ProfileMutation(profile=profile, deltas=plan_create(profile), created=True)

    async def _commit(self, mutation: ProfileMutation) -> None:
        # Caller holds self._lock.
        await self._engine.apply(mutation.deltas)
        await self._store.put(mutation.profile.user_id, mutation.profile)
        logger.info(
            "profile_created" if mutation.created else "profile_updated",
            user_id=mutation.profile.user_id,
            profile_id=mutation.profile.id,
            alliance=mutation.profile.alliance,
            server=mutation.profile.server,
            aggregate_deltas=len(mutation.deltas),
        )


def _plan_update(existing: GameProfile, changes: Mapping[str, Any]) -> ProfileMutation:
    # Deltas are planned from the pre-merge snapshot before the fields are merged.
    deltas = plan_update(existing, changes)
    return ProfileMutation(profile=replace(existing, **changes), deltas=deltas)


def _present(data: Mapping[str, Any]) -> dict[str, Any]:
    changes = {}
    for k, v in data.items():
        if k not in MUTABLE_FIELDS or v is None:
            continue
        if k in _BLANK_IS_MISSING and isinstance(v, str):
            v = v.strip()
            if not v:
                continue
        changes[k] = v
    return changes
