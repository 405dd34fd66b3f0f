"""Tests for token-before-session request authentication."""

from __future__ import annotations

import pytest

from gstats.auth.resolver import AuthResolver
from gstats.auth.service import CredentialService
from gstats.auth.sessions import SessionStore
from gstats.auth.tokens import TokenRegistry
from gstats.errors import Unauthenticated
from gstats.stores import MemoryStore


@pytest.fixture
def parts():
    users = CredentialService(MemoryStore())
    tokens = TokenRegistry(MemoryStore())
    sessions = SessionStore(MemoryStore(), max_age_seconds=3600)
    return users, tokens, sessions, AuthResolver(users, tokens, sessions)


class TestAuthResolver:
    async def test_token_resolves(self, parts):
        users, tokens, _sessions, resolver = parts
        x = await users.register("x", "pw", "x@example.com")
        token = await tokens.issue(x.id)

        identity = await resolver.resolve(token, None)
        assert identity.user == x
        assert identity.method == "token"

    async def test_token_wins_over_other_users_session(self, parts):
        users, tokens, sessions, resolver = parts
        x = await users.register("x", "pw", "x@example.com")
        y = await users.register("y", "pw", "y@example.com")
        token = await tokens.issue(x.id)
        session_id = await sessions.create(y.id)

        identity = await resolver.resolve(token, session_id)
        assert identity.user_id == x.id
        assert identity.method == "token"
        assert identity.token == token
        assert identity.session_id == session_id

    async def test_token_wins_over_dead_session(self, parts):
        users, tokens, _sessions, resolver = parts
        x = await users.register("x", "pw", "x@example.com")
        token = await tokens.issue(x.id)

        identity = await resolver.resolve(token, "expired-or-unknown")
        assert identity.user_id == x.id

    async def test_unregistered_token_falls_back_to_session(self, parts):
        users, _tokens, sessions, resolver = parts
        y = await users.register("y", "pw", "y@example.com")
        session_id = await sessions.create(y.id)

        identity = await resolver.resolve("revoked-token", session_id)
        assert identity.user_id == y.id
        assert identity.method == "session"
        assert identity.token == "revoked-token"

    async def test_neither_is_unauthenticated(self, parts):
        *_, resolver = parts
        with pytest.raises(Unauthenticated):
            await resolver.resolve(None, None)

    async def test_revoked_token_without_session_is_unauthenticated(self, parts):
        users, tokens, _sessions, resolver = parts
        x = await users.register("x", "pw", "x@example.com")
        token = await tokens.issue(x.id)
        await tokens.revoke(token)

        with pytest.raises(Unauthenticated):
            await resolver.resolve(token, None)

    async def test_token_for_missing_user_is_unauthenticated(self, parts):
        _users, tokens, _sessions, resolver = parts
        token = await tokens.issue(999)
        with pytest.raises(Unauthenticated):
            await resolver.resolve(token, None)
