"""Key-value store capability shared by every state holder.

Services only depend on this interface, so a persistent backend can replace the
in-memory one without touching the code that mutates state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class KeyValueStore(ABC, Generic[K, V]):
    """Abstract async key-value store."""

    @abstractmethod
    async def get(self, key: K) -> V | None:
        """Return the value for ``key`` or None."""
        ...

    @abstractmethod
    async def put(self, key: K, value: V) -> None:
        """Insert or replace. Replacing keeps the key's original position."""
        ...

    @abstractmethod
    async def delete(self, key: K) -> None:
        """Remove ``key``. Missing keys are ignored."""
        ...

    @abstractmethod
    async def values(self) -> list[V]:
        """All values in first-insertion order."""
        ...
