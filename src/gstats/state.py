"""Process-wide service graph, built once at startup."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from gstats.alliances.engine import AllianceAggregateEngine
from gstats.auth.resolver import AuthResolver
from gstats.auth.service import CredentialService
from gstats.auth.sessions import SessionStore
from gstats.auth.tokens import TokenRegistry
from gstats.config import Settings
from gstats.gateway.client import GameGateway
from gstats.profiles.service import ProfileService
from gstats.rankings.service import RankingService
from gstats.redis_client import close_redis, get_redis, init_redis
from gstats.stores import KeyValueStore, MemoryStore, RedisStore

logger = structlog.get_logger()


@dataclass
class AppState:
    users: CredentialService
    tokens: TokenRegistry
    sessions: SessionStore
    resolver: AuthResolver
    alliances: AllianceAggregateEngine
    profiles: ProfileService
    rankings: RankingService
    gateway: GameGateway


_state: AppState | None = None


async def init_state(settings: Settings) -> AppState:
    """Build a fresh service graph. Any previous state is discarded."""
    global _state  # noqa: PLW0603

    token_store: KeyValueStore
    session_store: KeyValueStore
    if settings.store_backend == "redis":
        await init_redis(settings.redis_url)
        redis = get_redis()
        token_store = RedisStore(redis, "auth:token")
        session_store = RedisStore(redis, "auth:session", ttl_seconds=settings.session_max_age_seconds)
    else:
        token_store = MemoryStore()
        session_store = MemoryStore()

    users = CredentialService(MemoryStore())
    tokens = TokenRegistry(token_store)
    sessions = SessionStore(session_store, settings.session_max_age_seconds)
    alliances = AllianceAggregateEngine(MemoryStore())
    profiles = ProfileService(MemoryStore(), alliances)

    _state = AppState(
        users=users,
        tokens=tokens,
        sessions=sessions,
        resolver=AuthResolver(users, tokens, sessions),
        alliances=alliances,
        profiles=profiles,
        rankings=RankingService(profiles, alliances),
        gateway=GameGateway(
            settings.gateway_base_url,
            settings.gateway_client_id,
            settings.gateway_secret,
            timeout=settings.gateway_timeout_seconds,
        ),
    )
    logger.info("state_initialized", store_backend=settings.store_backend)
    return _state


async def close_state() -> None:
    global _state  # noqa: PLW0603
    _state = None
    await close_redis()


def get_state() -> AppState:
    if _state is None:
        msg = "State not initialized. Call init_state() first."
        raise RuntimeError(msg)
    return _state
