"""Server-side sessions referenced by an HttpOnly cookie."""

from __future__ import annotations

import secrets
import time
from collections.abc import Callable

from gstats.stores.base import KeyValueStore


class SessionStore:
    """Maps an opaque session id to ``{"user_id", "expires_at"}``.

    Expiry is checked on every lookup; expired sessions are dropped lazily.
    """

    def __init__(
        self,
        store: KeyValueStore[str, dict],
        max_age_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._max_age = max_age_seconds
        self._clock = clock

    @property
    def max_age_seconds(self) -> int:
        return self._max_age

    async def create(self, user_id: int) -> str:
        session_id = secrets.token_urlsafe(32)
        await self._store.put(
            session_id,
            {"user_id": user_id, "expires_at": self._clock() + self._max_age},
        )
        return session_id

    async def resolve(self, session_id: str) -> int | None:
        if not session_id:
            return None
        record = await self._store.get(session_id)
        if record is None:
            return None
        if record["expires_at"] <= self._clock():
            await self._store.delete(session_id)
            return None
        return int(record["user_id"])

    async def destroy(self, session_id: str) -> None:
        await self._store.delete(session_id)
