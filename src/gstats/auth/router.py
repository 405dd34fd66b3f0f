"""Authentication router: register, login, logout and the current user."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response

from gstats.auth.dependencies import get_current_identity
from gstats.auth.models import Identity, User
from gstats.auth.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from gstats.auth.service import CredentialService
from gstats.auth.sessions import SessionStore
from gstats.auth.tokens import TokenRegistry
from gstats.config import get_settings
from gstats.dependencies import get_credential_service, get_session_store, get_token_registry

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["Authentication"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, username=user.username, email=user.email)


async def _start_login(
    user: User,
    response: Response,
    tokens: TokenRegistry,
    sessions: SessionStore,
) -> AuthResponse:
    """Issue a bearer token and open a cookie session for ``user``."""
    settings = get_settings()
    token = await tokens.issue(user.id)
    session_id = await sessions.create(user.id)
    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        max_age=sessions.max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    return AuthResponse(id=user.id, username=user.username, email=user.email, token=token)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    response: Response,
    users: CredentialService = Depends(get_credential_service),
    tokens: TokenRegistry = Depends(get_token_registry),
    sessions: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    """Create an account and log it in."""
    try:
        user = await users.register(body.username, body.password, body.email)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return await _start_login(user, response, tokens, sessions)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    users: CredentialService = Depends(get_credential_service),
    tokens: TokenRegistry = Depends(get_token_registry),
    sessions: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    """Login with username + password."""
    user = await users.authenticate(body.username, body.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    logger.info("user_logged_in", user_id=user.id)
    return await _start_login(user, response, tokens, sessions)


@router.post("/logout")
async def logout(
    response: Response,
    identity: Identity = Depends(get_current_identity),
    tokens: TokenRegistry = Depends(get_token_registry),
    sessions: SessionStore = Depends(get_session_store),
) -> dict[str, str]:
    """Revoke the token sent with this request and end its session."""
    if identity.token:
        await tokens.revoke(identity.token)
    if identity.session_id:
        await sessions.destroy(identity.session_id)
    response.delete_cookie(get_settings().session_cookie_name, path="/")
    logger.info("user_logged_out", user_id=identity.user_id, method=identity.method)
    return {"status": "logged_out"}


@router.get("/user", response_model=UserResponse)
async def current_user(identity: Identity = Depends(get_current_identity)) -> UserResponse:
    """The authenticated user."""
    return _user_response(identity.user)
