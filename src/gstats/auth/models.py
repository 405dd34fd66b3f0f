"""User record and the resolved request identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class User:
    id: int
    username: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class Identity:
    """The acting user of a request and the credential that proved it."""

    user: User
    method: Literal["token", "session"]
    token: str | None = None
    session_id: str | None = None

    @property
    def user_id(self) -> int:
        return self.user.id
