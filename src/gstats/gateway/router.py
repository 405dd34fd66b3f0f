"""Game gateway proxy: forwards signed requests and passes responses through."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from gstats.auth.dependencies import get_current_identity
from gstats.auth.models import Identity
from gstats.dependencies import get_gateway
from gstats.errors import UpstreamError
from gstats.gateway.client import GameGateway
from gstats.gateway.schemas import GameTokenRequest

router = APIRouter(prefix="/api/game", tags=["Game gateway"])


def _passthrough(upstream: httpx.Response) -> Response:
    if not upstream.is_success:
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            media_type=upstream.headers.get("content-type", "text/plain"),
        )
    try:
        data = upstream.json()
    except ValueError as e:
        raise UpstreamError("Malformed response from game gateway") from e
    return JSONResponse(content=data, status_code=upstream.status_code)


@router.post("/token")
async def game_token(
    body: GameTokenRequest,
    _identity: Identity = Depends(get_current_identity),
    gateway: GameGateway = Depends(get_gateway),
) -> Response:
    """Exchange a signed character payload for a lite token."""
    upstream = await gateway.request_lite_token(body.encoded_payload, body.sign)
    return _passthrough(upstream)


@router.get("/info")
async def game_info(
    lite_token: str = Query(..., min_length=1),
    _identity: Identity = Depends(get_current_identity),
    gateway: GameGateway = Depends(get_gateway),
) -> Response:
    """Fetch character info for a lite token."""
    upstream = await gateway.fetch_character_info(lite_token)
    return _passthrough(upstream)
