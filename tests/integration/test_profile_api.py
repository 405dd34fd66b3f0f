"""Integration tests for /api/profile and the /api/game proxy."""

from __future__ import annotations

import json

import httpx
import pytest
from httpx import AsyncClient

from gstats.dependencies import get_gateway
from gstats.gateway.client import INFO_PATH, TOKEN_PATH, GameGateway

GAME_DATA = {
    "characterId": "c-1",
    "nickname": "Hero",
    "server": "S1",
    "alliance": "Guild",
    "level": 12,
    "powerNow": 1000,
    "powerMax": 1200,
    "hiddenPower": 200,
}


def use_gateway(app, handler) -> list[httpx.Request]:
    """Route the app's gateway through ``handler`` and record each request."""
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    gateway = GameGateway("https://gateway.test", "client:1", "s3cret", transport=httpx.MockTransport(recording))
    app.dependency_overrides[get_gateway] = lambda: gateway
    return seen


class TestProfile:
    async def test_requires_auth(self, anon_client: AsyncClient):
        assert (await anon_client.get("/api/profile")).status_code == 401
        assert (await anon_client.post("/api/profile/game-data", json=GAME_DATA)).status_code == 401
        assert (await anon_client.patch("/api/profile/alliance", json={"alliance": "x"})).status_code == 401

    async def test_not_found_before_submission(self, token_client: AsyncClient):
        response = await token_client.get("/api/profile")
        assert response.status_code == 404
        assert response.json() == {"detail": "Profile not found"}

    async def test_create_and_read(self, token_client: AsyncClient, registered_user: dict):
        response = await token_client.post("/api/profile/game-data", json=GAME_DATA)
        assert response.status_code == 200
        created = response.json()
        assert created["userId"] == registered_user["id"]
        assert created["powerNow"] == 1000
        assert created["hiddenPower"] == 200

        response = await token_client.get("/api/profile")
        assert response.json() == created

    async def test_update_merges_present_fields(self, token_client: AsyncClient):
        created = (await token_client.post("/api/profile/game-data", json=GAME_DATA)).json()

        response = await token_client.post("/api/profile/game-data", json={
            "characterId": "c-1", "nickname": "Hero", "powerNow": 1500, "alliance": "",
        })
        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == created["id"]
        assert updated["powerNow"] == 1500
        assert updated["alliance"] == "Guild"
        assert updated["server"] == "S1"
        assert updated["level"] == 12

    async def test_session_auth(self, client: AsyncClient, registered_user: dict):
        response = await client.post("/api/profile/game-data", json=GAME_DATA)
        assert response.status_code == 200
        assert response.json()["userId"] == registered_user["id"]

    @pytest.mark.parametrize("body", [
        {"nickname": "Hero"},
        {**GAME_DATA, "powerNow": -1},
        {**GAME_DATA, "level": "high"},
    ])
    async def test_validation(self, token_client: AsyncClient, body: dict):
        response = await token_client.post("/api/profile/game-data", json=body)
        assert response.status_code == 400
        assert response.json()["detail"] == "Validation error"

    async def test_patch_alliance(self, token_client: AsyncClient):
        await token_client.post("/api/profile/game-data", json=GAME_DATA)

        response = await token_client.patch("/api/profile/alliance", json={"alliance": "Guild2"})
        assert response.status_code == 200
        assert response.json()["alliance"] == "Guild2"

        response = await token_client.get("/api/rankings/alliances", params={"server": "S1"})
        assert response.status_code == 200
        assert response.json() == [
            {"id": 2, "name": "Guild2", "server": "S1", "memberCount": 1, "totalPower": 1000, "averagePower": 1000},
            {"id": 1, "name": "Guild", "server": "S1", "memberCount": 0, "totalPower": 0, "averagePower": 0},
        ]

    async def test_patch_alliance_without_profile(self, token_client: AsyncClient):
        response = await token_client.patch("/api/profile/alliance", json={"alliance": "Guild"})
        assert response.status_code == 404


class TestLinkCharacter:
    async def test_link_stores_gateway_stats(self, app, token_client: AsyncClient):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == TOKEN_PATH:
                return httpx.Response(200, json={"lite_token": "lt-1"})
            return httpx.Response(200, json={
                "server_id": 77,
                "meta_info": json.dumps({"cityLvl": 30, "power": 900, "maxPower": 1000}),
            })

        use_gateway(app, handler)
        response = await token_client.post("/api/profile/link", json={
            "characterId": "c-9", "nickname": "Linked", "alliance": "Guild",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["server"] == "77"
        assert data["level"] == 30
        assert data["powerNow"] == 900
        assert data["hiddenPower"] == 100

        rows = (await token_client.get("/api/rankings/alliances", params={"server": "77"})).json()
        assert rows[0]["name"] == "Guild"
        assert rows[0]["totalPower"] == 900

    async def test_gateway_failure_writes_nothing(self, app, token_client: AsyncClient):
        use_gateway(app, lambda request: httpx.Response(403, text="bad sign"))

        response = await token_client.post("/api/profile/link", json={"characterId": "c-9", "nickname": "Linked"})
        assert response.status_code == 403
        assert response.text == "bad sign"
        assert (await token_client.get("/api/profile")).status_code == 404


class TestGameProxy:
    async def test_token_passthrough(self, app, token_client: AsyncClient):
        seen = use_gateway(app, lambda request: httpx.Response(200, json={"lite_token": "lt-1"}))

        response = await token_client.post("/api/game/token", json={"encoded_payload": "e30=", "sign": "abc"})
        assert response.status_code == 200
        assert response.json() == {"lite_token": "lt-1"}
        assert seen[0].url.path == TOKEN_PATH
        assert b"e30=" in seen[0].content

    async def test_token_error_passthrough(self, app, token_client: AsyncClient):
        use_gateway(app, lambda request: httpx.Response(401, text="invalid sign"))

        response = await token_client.post("/api/game/token", json={"encoded_payload": "e30=", "sign": "abc"})
        assert response.status_code == 401
        assert response.text == "invalid sign"

    async def test_info_passthrough(self, app, token_client: AsyncClient):
        seen = use_gateway(app, lambda request: httpx.Response(200, json={"server_id": 1}))

        response = await token_client.get("/api/game/info", params={"lite_token": "lt-1"})
        assert response.status_code == 200
        assert response.json() == {"server_id": 1}
        assert seen[0].url.path == INFO_PATH
        assert seen[0].url.params["lite_token"] == "lt-1"

    async def test_info_requires_lite_token(self, token_client: AsyncClient):
        response = await token_client.get("/api/game/info")
        assert response.status_code == 400

    async def test_unreachable_gateway_is_500(self, app, token_client: AsyncClient):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        use_gateway(app, handler)
        response = await token_client.get("/api/game/info", params={"lite_token": "lt-1"})
        assert response.status_code == 500

    async def test_requires_auth(self, anon_client: AsyncClient):
        response = await anon_client.get("/api/game/info", params={"lite_token": "lt-1"})
        assert response.status_code == 401
