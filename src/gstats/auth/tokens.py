"""Bearer token registry: opaque token -> user id.

Tokens are 32 random bytes, hex encoded. They never expire on their own;
only logout removes them. One user may hold several tokens (one per device).
"""

from __future__ import annotations

import secrets

import structlog

from gstats.stores.base import KeyValueStore

logger = structlog.get_logger()

TOKEN_BYTES = 32


class TokenRegistry:
    def __init__(self, store: KeyValueStore[str, int]) -> None:
        self._store = store

    async def issue(self, user_id: int) -> str:
        """Create and register a new token for ``user_id``."""
        token = secrets.token_hex(TOKEN_BYTES)
        await self._store.put(token, user_id)
        logger.info("token_issued", user_id=user_id)
        return token

    async def resolve(self, token: str) -> int | None:
        """Return the user id a token belongs to, or None if it is not registered."""
        if not token:
            return None
        user_id = await self._store.get(token)
        return int(user_id) if user_id is not None else None

    async def revoke(self, token: str) -> None:
        """Forget a token. Unknown tokens are ignored."""
        await self._store.delete(token)
        logger.info("token_revoked")
