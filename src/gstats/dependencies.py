"""Shared FastAPI dependencies."""

from gstats.auth.resolver import AuthResolver
from gstats.auth.service import CredentialService
from gstats.auth.sessions import SessionStore
from gstats.auth.tokens import TokenRegistry
from gstats.gateway.client import GameGateway
from gstats.profiles.service import ProfileService
from gstats.rankings.service import RankingService
from gstats.state import get_state


def get_credential_service() -> CredentialService:
    return get_state().users


def get_token_registry() -> TokenRegistry:
    return get_state().tokens


def get_session_store() -> SessionStore:
    return get_state().sessions


def get_auth_resolver() -> AuthResolver:
    return get_state().resolver


def get_profile_service() -> ProfileService:
    return get_state().profiles


def get_ranking_service() -> RankingService:
    return get_state().rankings


def get_gateway() -> GameGateway:
    """The game gateway client (overridden in tests with a mock transport)."""
    return get_state().gateway
