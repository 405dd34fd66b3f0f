"""Redis-backed store for JSON-serializable values under a key prefix."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from gstats.stores.base import KeyValueStore

if TYPE_CHECKING:
    from redis.asyncio import Redis


class RedisStore(KeyValueStore[str, Any]):
    """Stores each value as a JSON string at ``{prefix}:{key}``.

    ``values()`` walks the prefix with SCAN, so its order is Redis' order,
    not insertion order. Only tokens and sessions use this backend and
    neither is ever listed in order.
    """

    def __init__(self, redis: Redis, prefix: str, ttl_seconds: int | None = None) -> None:
        self._redis = redis
        self._prefix = prefix
        self._ttl = ttl_seconds

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> Any | None:  # noqa: ANN401
        raw = await self._redis.get(self._key(key))
        if raw is None:
            return None
        return json.loads(raw)

    async def put(self, key: str, value: Any) -> None:  # noqa: ANN401
        await self._redis.set(self._key(key), json.dumps(value), ex=self._ttl)

    async def delete(self, key: str) -> None:
        await self._redis.delete(self._key(key))

    async def values(self) -> list[Any]:
        result: list[Any] = []
        async for redis_key in self._redis.scan_iter(match=f"{self._prefix}:*"):
            raw = await self._redis.get(redis_key)
            if raw is not None:
                result.append(json.loads(raw))
        return result
