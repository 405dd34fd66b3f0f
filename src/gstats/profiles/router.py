"""Game profile router: the current user's linked character."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gstats.auth.dependencies import get_current_identity
from gstats.auth.models import Identity
from gstats.dependencies import get_gateway, get_profile_service
from gstats.errors import NotFound
from gstats.gateway.client import GameGateway
from gstats.profiles.schemas import (
    AllianceUpdateRequest,
    GameDataRequest,
    GameProfileResponse,
    LinkCharacterRequest,
)
from gstats.profiles.service import ProfileService

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("", response_model=GameProfileResponse)
async def get_profile(
    identity: Identity = Depends(get_current_identity),
    profiles: ProfileService = Depends(get_profile_service),
) -> GameProfileResponse:
    """The current user's game profile."""
    profile = await profiles.get_for_user(identity.user_id)
    if profile is None:
        raise NotFound("Profile not found")
    return GameProfileResponse.model_validate(profile)


@router.post("/game-data", response_model=GameProfileResponse)
async def submit_game_data(
    body: GameDataRequest,
    identity: Identity = Depends(get_current_identity),
    profiles: ProfileService = Depends(get_profile_service),
) -> GameProfileResponse:
    """Create or update the current user's profile from submitted game data."""
    mutation = await profiles.submit_game_data(identity.user_id, body.model_dump())
    return GameProfileResponse.model_validate(mutation.profile)


@router.post("/link", response_model=GameProfileResponse)
async def link_character(
    body: LinkCharacterRequest,
    identity: Identity = Depends(get_current_identity),
    profiles: ProfileService = Depends(get_profile_service),
    gateway: GameGateway = Depends(get_gateway),
) -> GameProfileResponse:
    """Fetch a character's stats from the game gateway and store them.

    Gateway failures raise before anything is written.
    """
    stats = await gateway.fetch_game_stats(body.character_id, body.nickname)
    data = {
        "character_id": body.character_id,
        "nickname": body.nickname,
        "alliance": body.alliance,
        **stats.as_profile_fields(),
    }
    mutation = await profiles.submit_game_data(identity.user_id, data)
    return GameProfileResponse.model_validate(mutation.profile)


@router.patch("/alliance", response_model=GameProfileResponse)
async def update_alliance(
    body: AllianceUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    profiles: ProfileService = Depends(get_profile_service),
) -> GameProfileResponse:
    """Move the current user's profile to another alliance."""
    mutation = await profiles.update_alliance(identity.user_id, body.alliance)
    return GameProfileResponse.model_validate(mutation.profile)
