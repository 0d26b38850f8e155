"""Tests for SatoriMessagingService."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from aiohttp import test_utils, web

from loopbot.config import SatoriConfig
from loopbot.infrastructure.satori import SatoriApiError, SatoriMessagingService


@pytest.fixture
async def satori_api() -> AsyncGenerator[dict[str, Any], None]:
    """Start a fake Satori HTTP API recording requests."""
    state: dict[str, Any] = {"requests": [], "status": 200}

    async def message_create(request: web.Request) -> web.Response:
        state["requests"].append(
            {"headers": dict(request.headers), "json": await request.json()}
        )
        if state["status"] != 200:
            return web.Response(status=state["status"], text="channel not found")
        return web.json_response([{"id": "M100", "content": "ok"}])

    app = web.Application()
    app.router.add_post("/v1/message.create", message_create)
    server = test_utils.TestServer(app)
    await server.start_server()
    state["url"] = f"http://{server.host}:{server.port}"
    yield state
    await server.close()


class TestSatoriMessagingService:
    """SatoriMessagingService tests."""

    async def test_send_message(self, satori_api: dict[str, Any]) -> None:
        service = SatoriMessagingService(
            SatoriConfig(ws_url="", api_url=satori_api["url"], token="secret")
        )

        await service.send_message("discord", "BOT", "C1", "Hello!")
        await service.close()

        request = satori_api["requests"][0]
        assert request["json"] == {"channel_id": "C1", "content": "Hello!"}
        headers = request["headers"]
        assert headers["Authorization"] == "Bearer secret"
        assert headers["Satori-Platform"] == "discord"
        assert headers["Satori-User-ID"] == "BOT"
        assert headers["X-Platform"] == "discord"
        assert headers["X-Self-ID"] == "BOT"

    async def test_send_without_token(self, satori_api: dict[str, Any]) -> None:
        service = SatoriMessagingService(
            SatoriConfig(ws_url="", api_url=satori_api["url"] + "/")
        )

        await service.send_message("discord", "BOT", "C1", "Hello!")
        await service.close()

        assert "Authorization" not in satori_api["requests"][0]["headers"]

    async def test_error_status(self, satori_api: dict[str, Any]) -> None:
        satori_api["status"] = 404
        service = SatoriMessagingService(
            SatoriConfig(ws_url="", api_url=satori_api["url"])
        )

        with pytest.raises(SatoriApiError) as exc_info:
            await service.send_message("discord", "BOT", "C1", "Hello!")
        await service.close()

        assert exc_info.value.status == 404
        assert "channel not found" in str(exc_info.value)
