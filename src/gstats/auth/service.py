"""
Credential store: user records, registration and password checks.

Users are keyed by id. Username and email uniqueness is enforced by scanning
the store under a lock, which is fine for the small player counts this serves.
"""

from __future__ import annotations

import asyncio
import itertools

import structlog

from gstats.auth.models import User
from gstats.auth.password import hash_password, verify_password
from gstats.stores.base import KeyValueStore

logger = structlog.get_logger()


class CredentialService:
    def __init__(self, store: KeyValueStore[int, User]) -> None:
        self._store = store
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    # ---------------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------------

    async def get_user(self, user_id: int) -> User | None:
        """Fetch a user by id."""
        return await self._store.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        """Fetch a user by exact username."""
        for user in await self._store.values():
            if user.username == username:
                return user
        return None

    async def get_user_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive)."""
        email = email.lower()
        for user in await self._store.values():
            if user.email.lower() == email:
                return user
        return None

    # ---------------------------------------------------------------------------
    # Registration / login
    # ---------------------------------------------------------------------------

    async def register(self, username: str, password: str, email: str) -> User:
        """
        Create a new user.

        Raises:
            ValueError: If the username or email is already registered.
        """
        async with self._lock:
            if await self.get_user_by_username(username) is not None:
                msg = "Username already exists"
                raise ValueError(msg)
            if await self.get_user_by_email(email) is not None:
                msg = "Email already registered"
                raise ValueError(msg)

            user = User(
                id=next(self._ids),
                username=username,
                email=email,
                password_hash=hash_password(password),
            )
            await self._store.put(user.id, user)

        logger.info("user_registered", user_id=user.id, username=username)
        return user

    async def authenticate(self, username: str, password: str) -> User | None:
        """Return the user when the credentials match, otherwise None."""
        user = await self.get_user_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("login_failed", username=username)
            return None
        return user
