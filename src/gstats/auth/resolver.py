"""
Request authentication: bearer token first, then session cookie.

Every protected endpoint goes through ``AuthResolver.resolve`` so the
precedence is the same everywhere:

1. a registered bearer token whose user exists wins, even when a session is
   also present;
2. otherwise a live session whose user exists;
3. otherwise ``Unauthenticated``.

An unregistered token does not fail the request by itself; it simply falls
through to the session check.
"""

from __future__ import annotations

from gstats.auth.models import Identity
from gstats.auth.service import CredentialService
from gstats.auth.sessions import SessionStore
from gstats.auth.tokens import TokenRegistry
from gstats.errors import Unauthenticated


class AuthResolver:
    def __init__(
        self,
        users: CredentialService,
        tokens: TokenRegistry,
        sessions: SessionStore,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._sessions = sessions

    async def resolve(self, token: str | None, session_id: str | None) -> Identity:
        """Return the acting identity or raise ``Unauthenticated``."""
        if token:
            user_id = await self._tokens.resolve(token)
            if user_id is not None:
                user = await self._users.get_user(user_id)
                if user is not None:
                    return Identity(user=user, method="token", token=token, session_id=session_id)

        if session_id:
            user_id = await self._sessions.resolve(session_id)
            if user_id is not None:
                user = await self._users.get_user(user_id)
                if user is not None:
                    return Identity(user=user, method="session", token=token, session_id=session_id)

        raise Unauthenticated()
