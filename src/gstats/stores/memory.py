"""Dict-backed store. Nothing survives a restart."""

from __future__ import annotations

from gstats.stores.base import K, KeyValueStore, V


class MemoryStore(KeyValueStore[K, V]):
    def __init__(self) -> None:
        self._data: dict[K, V] = {}

    async def get(self, key: K) -> V | None:
        return self._data.get(key)

    async def put(self, key: K, value: V) -> None:
        self._data[key] = value

    async def delete(self, key: K) -> None:
        self._data.pop(key, None)

    async def values(self) -> list[V]:
        return list(self._data.values())
