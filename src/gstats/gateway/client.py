"""
Client for the external game-data gateway.

Linking a character takes two calls:

1. POST ``/tgs/gateway2/character/litetoken`` with a base64 JSON payload
   ``{"character_id", "nickname"}`` and an HMAC-SHA256 ``sign`` over the
   unencoded JSON. The gateway answers with a short-lived ``lite_token``.
2. GET ``/tgs/gateway2/oap/character/info?lite_token=...``, which returns
   ``server_id`` and a nested JSON string ``meta_info`` holding
   ``cityLvl``, ``power`` and ``maxPower``.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from gstats.errors import UpstreamError

logger = structlog.get_logger()

TOKEN_PATH = "/tgs/gateway2/character/litetoken"
INFO_PATH = "/tgs/gateway2/oap/character/info"


@dataclass(frozen=True)
class GameStats:
    server: str
    level: int
    power_now: int
    power_max: int
    hidden_power: int

    def as_profile_fields(self) -> dict[str, Any]:
        return {
            "server": self.server,
            "level": self.level,
            "power_now": self.power_now,
            "power_max": self.power_max,
            "hidden_power": self.hidden_power,
        }


def sign_payload(character_id: str, nickname: str, secret: str) -> tuple[str, str]:
    """Return ``(encoded_payload, sign)`` for a lite token request."""
    payload = json.dumps(
        {"character_id": character_id, "nickname": nickname},
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")
    encoded = base64.b64encode(payload).decode("ascii")
    sign = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return encoded, sign


def parse_character_info(data: Any) -> GameStats:  # noqa: ANN401
    """
    Turn a character info body into profile stats.

    Raises:
        UpstreamError: If required fields are missing or not numeric.
    """
    try:
        meta = data["meta_info"]
        if isinstance(meta, str):
            meta = json.loads(meta)
        power = int(meta["power"])
        max_power = int(meta["maxPower"])
        return GameStats(
            server=str(data["server_id"]),
            level=int(meta["cityLvl"]),
            power_now=power,
            power_max=max_power,
            hidden_power=max_power - power,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamError("Malformed character info from game gateway") from e


class GameGateway:
    def __init__(
        self,
        base_url: str,
        client_id: str,
        secret: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.client_id = client_id
        self.secret = secret
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    def sign_payload(self, character_id: str, nickname: str) -> tuple[str, str]:
        return sign_payload(character_id, nickname, self.secret)

    async def request_lite_token(self, encoded_payload: str, sign: str) -> httpx.Response:
        """Send a signed lite token request. Non-2xx responses are returned, not raised."""
        try:
            async with self._client() as client:
                return await client.post(
                    TOKEN_PATH,
                    params={"client_id": self.client_id},
                    files={"encoded_payload": (None, encoded_payload), "sign": (None, sign)},
                )
        except httpx.HTTPError as e:
            logger.warning("gateway_token_request_failed", error=str(e))
            raise UpstreamError("Failed to get game token") from e

    async def fetch_character_info(self, lite_token: str) -> httpx.Response:
        """Fetch character info for a lite token. Non-2xx responses are returned, not raised."""
        try:
            async with self._client() as client:
                return await client.get(
                    INFO_PATH,
                    params={"lite_token": lite_token, "client_id": self.client_id},
                )
        except httpx.HTTPError as e:
            logger.warning("gateway_info_request_failed", error=str(e))
            raise UpstreamError("Failed to get game info") from e

    async def fetch_game_stats(self, character_id: str, nickname: str) -> GameStats:
        """
        Run the full token + info flow for one character.

        Raises:
            UpstreamError: With the gateway's status on non-2xx, else 500.
        """
        encoded, sign = self.sign_payload(character_id, nickname)

        token_response = await self.request_lite_token(encoded, sign)
        _raise_for_status(token_response, "token")
        lite_token = _json(token_response).get("lite_token")
        if not lite_token:
            raise UpstreamError("Failed to get authentication token")

        info_response = await self.fetch_character_info(lite_token)
        _raise_for_status(info_response, "info")
        stats = parse_character_info(_json(info_response))
        logger.info("gateway_stats_fetched", character_id=character_id, server=stats.server)
        return stats


def _raise_for_status(response: httpx.Response, step: str) -> None:
    if response.is_success:
        return
    logger.warning("gateway_error", step=step, status=response.status_code)
    raise UpstreamError(
        f"Game gateway {step} request failed",
        status_code=response.status_code,
        body=response.text,
    )


def _json(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError("Malformed response from game gateway") from e
    if not isinstance(data, dict):
        raise UpstreamError("Malformed response from game gateway")
    return data
