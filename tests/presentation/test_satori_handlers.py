"""Tests for Satori event handlers."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from loopbot.domain.entities import Login, ReadyEvent
from loopbot.presentation.satori_handlers import MESSAGE_CREATED, register_handlers
from tests.factories import create_event


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def ingestor() -> MagicMock:
    ingestor = MagicMock()
    ingestor.admit = AsyncMock(return_value=True)
    return ingestor


def get_message_handler(client: MagicMock):
    event_type, handler = client.on.call_args.args
    assert event_type == MESSAGE_CREATED
    return handler


class TestRegisterHandlers:
    """register_handlers tests."""

    async def test_message_created_admits(
        self, client: MagicMock, ingestor: MagicMock
    ) -> None:
        register_handlers(client, ingestor)
        handler = get_message_handler(client)
        event = create_event()

        await handler(event)

        ingestor.admit.assert_awaited_once_with(event)

    async def test_duplicate_not_admitted(
        self, client: MagicMock, ingestor: MagicMock
    ) -> None:
        ingestor.admit.return_value = False
        register_handlers(client, ingestor)

        await get_message_handler(client)(create_event())

        ingestor.admit.assert_awaited_once()

    async def test_ready_logs_logins(
        self,
        client: MagicMock,
        ingestor: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        register_handlers(client, ingestor)
        handler = client.on_ready.call_args.args[0]

        with caplog.at_level(logging.INFO):
            await handler(
                ReadyEvent(logins=[Login(platform="discord", self_id="BOT")])
            )

        assert "platform=discord" in caplog.text
        assert "self_id=BOT" in caplog.text
