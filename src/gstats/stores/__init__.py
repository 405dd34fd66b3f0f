"""State storage backends."""

from gstats.stores.base import KeyValueStore
from gstats.stores.memory import MemoryStore
from gstats.stores.redis_store import RedisStore

__all__ = ["KeyValueStore", "MemoryStore", "RedisStore"]
