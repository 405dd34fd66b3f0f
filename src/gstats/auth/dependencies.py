"""FastAPI authentication dependencies."""

from __future__ import annotations

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gstats.auth.models import Identity
from gstats.auth.resolver import AuthResolver
from gstats.config import get_settings
from gstats.dependencies import get_auth_resolver

# auto_error=False: a missing or malformed header falls through to the session cookie.
_bearer = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> str | None:
    return credentials.credentials if credentials else None


def get_session_id(request: Request) -> str | None:
    return request.cookies.get(get_settings().session_cookie_name)


async def get_current_identity(
    token: str | None = Depends(get_bearer_token),
    session_id: str | None = Depends(get_session_id),
    resolver: AuthResolver = Depends(get_auth_resolver),
) -> Identity:
    """
    Resolve the acting user: registered bearer token first, then session.

    Raises Unauthenticated (401) when neither is valid.
    """
    return await resolver.resolve(token, session_id)
