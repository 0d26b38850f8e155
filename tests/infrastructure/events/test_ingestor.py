"""Tests for EventIngestor."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from loopbot.application.services import ChatSessionService
from loopbot.config import LoopConfig
from loopbot.domain.entities import (
    BotContext,
    Channel,
    ChatContext,
    EventStatus,
    IncomingEvent,
    PendingEvent,
)
from loopbot.infrastructure.events import EventIngestor
from tests.factories import create_event


@pytest.fixture
def scheduler() -> MagicMock:
    scheduler = MagicMock()
    scheduler.on_message_arrival = AsyncMock()
    return scheduler


@pytest.fixture
def channel_repository() -> MagicMock:
    repository = MagicMock()
    repository.find_by_id = AsyncMock(return_value=None)
    repository.save = AsyncMock()
    return repository


@pytest.fixture
def message_repository() -> MagicMock:
    repository = MagicMock()
    repository.save = AsyncMock()
    return repository


@pytest.fixture
def ingestor(
    bot: BotContext,
    scheduler: MagicMock,
    channel_repository: MagicMock,
    message_repository: MagicMock,
) -> EventIngestor:
    return EventIngestor(
        bot=bot,
        sessions=ChatSessionService(bot, channel_repository),
        scheduler=scheduler,
        channel_repository=channel_repository,
        message_repository=message_repository,
        config=LoopConfig(max_unread_events=3),
    )


class TestAdmit:
    """admit tests."""

    async def test_buffers_and_triggers(
        self, ingestor: EventIngestor, bot: BotContext, scheduler: MagicMock
    ) -> None:
        event = create_event()

        assert await ingestor.admit(event) is True

        assert bot.unread_events["C1"] == [event]
        assert ("C1", "M1") in bot.processed_ids
        chat = bot.chats["C1"]
        assert chat.platform == "discord"
        assert chat.self_id == "BOT"
        scheduler.on_message_arrival.assert_awaited_once_with(chat, event)
        assert ingestor.pending_count == 0
        assert ingestor.is_processing is False

    async def test_duplicate_dropped(
        self,
        ingestor: EventIngestor,
        bot: BotContext,
        scheduler: MagicMock,
        message_repository: MagicMock,
    ) -> None:
        """Test at-most-once admission per message key."""
        event = create_event()

        await ingestor.admit(event)
        assert await ingestor.admit(event) is False

        assert len(bot.unread_events["C1"]) == 1
        scheduler.on_message_arrival.assert_awaited_once()
        message_repository.save.assert_awaited_once()

    async def test_same_message_id_other_channel(
        self, ingestor: EventIngestor, bot: BotContext
    ) -> None:
        await ingestor.admit(create_event(channel_id="C1"))

        assert await ingestor.admit(create_event(channel_id="C2")) is True

    async def test_hyphenated_ids_both_admitted(
        self, ingestor: EventIngestor, scheduler: MagicMock
    ) -> None:
        assert await ingestor.admit(create_event(channel_id="a-b", message_id="c"))
        assert await ingestor.admit(create_event(channel_id="a", message_id="b-c"))

        assert scheduler.on_message_arrival.await_count == 2

    async def test_event_without_message(
        self, ingestor: EventIngestor, bot: BotContext, scheduler: MagicMock
    ) -> None:
        event = IncomingEvent(
            id="1",
            type="message-created",
            platform="discord",
            self_id="BOT",
            channel=Channel(id="C1", name="general"),
        )

        assert await ingestor.admit(event) is False
        assert bot.event_queue == []
        scheduler.on_message_arrival.assert_not_awaited()

    async def test_self_echo_not_buffered(
        self,
        ingestor: EventIngestor,
        bot: BotContext,
        scheduler: MagicMock,
        message_repository: MagicMock,
    ) -> None:
        """Test that the bot's own messages are recorded but not reacted to."""
        event = create_event(user_id="BOT", self_id="BOT")

        assert await ingestor.admit(event) is True

        assert not bot.has_unread("C1")
        scheduler.on_message_arrival.assert_not_awaited()
        message_repository.save.assert_awaited_once()

    async def test_unread_buffer_bounded(
        self, ingestor: EventIngestor, bot: BotContext
    ) -> None:
        for i in range(5):
            await ingestor.admit(create_event(message_id=f"M{i}"))

        events = bot.unread_events["C1"]
        assert [e.message.id for e in events if e.message] == ["M2", "M3", "M4"]

    async def test_records_channel_and_message(
        self,
        ingestor: EventIngestor,
        channel_repository: MagicMock,
        message_repository: MagicMock,
    ) -> None:
        await ingestor.admit(create_event(content="hi there"))

        channel = channel_repository.save.call_args.args[0]
        assert channel == Channel(
            id="C1", name="general", platform="discord", self_id="BOT"
        )
        message = message_repository.save.call_args.args[0]
        assert message.content == "hi there"
        assert message.user_id == "U1"
        assert message.user_name == "alice"

    async def test_persistence_failure_skips_event(
        self,
        ingestor: EventIngestor,
        bot: BotContext,
        scheduler: MagicMock,
        channel_repository: MagicMock,
    ) -> None:
        """Test that an event whose recording fails is dequeued untouched."""
        channel_repository.save.side_effect = [RuntimeError("db locked"), None]

        assert await ingestor.admit(create_event(message_id="M1")) is True

        assert not bot.has_unread("C1")
        scheduler.on_message_arrival.assert_not_awaited()
        assert ingestor.pending_count == 0
        assert ingestor.is_processing is False

        # 次のイベントは通常どおり処理される
        await ingestor.admit(create_event(message_id="M2"))

        assert [e.message.id for e in bot.unread_events["C1"] if e.message] == ["M2"]
        scheduler.on_message_arrival.assert_awaited_once()

    async def test_message_save_failure_skips_event(
        self,
        ingestor: EventIngestor,
        bot: BotContext,
        scheduler: MagicMock,
        message_repository: MagicMock,
    ) -> None:
        message_repository.save.side_effect = RuntimeError("disk full")

        await ingestor.admit(create_event())

        assert not bot.has_unread("C1")
        scheduler.on_message_arrival.assert_not_awaited()

    async def test_existing_platform_info_kept(
        self, ingestor: EventIngestor, bot: BotContext
    ) -> None:
        bot.chats["C1"] = ChatContext(
            channel_id="C1", platform="telegram", self_id="TBOT"
        )

        await ingestor.admit(create_event())

        assert bot.chats["C1"].platform == "telegram"
        assert bot.chats["C1"].self_id == "TBOT"


class TestDrain:
    """drain tests."""

    async def test_fifo_across_channels(
        self, ingestor: EventIngestor, scheduler: MagicMock
    ) -> None:
        """Test that events queued during a cycle run afterwards, in order."""
        order: list[str] = []
        first_running = asyncio.Event()
        release = asyncio.Event()

        async def on_message_arrival(chat: ChatContext, event: IncomingEvent) -> None:
            key = event.get_message_key()
            order.append("-".join(key) if key else "")
            if len(order) == 1:
                first_running.set()
                await release.wait()

        scheduler.on_message_arrival.side_effect = on_message_arrival

        first = asyncio.create_task(ingestor.admit(create_event(message_id="M1")))
        await first_running.wait()

        # 処理中の到着はキューに積まれるだけで即座に返る
        assert await ingestor.admit(
            create_event(message_id="M2", channel_id="C2")
        ) is True
        assert await ingestor.admit(create_event(message_id="M3")) is True
        assert ingestor.pending_count == 3
        assert ingestor.is_processing is True

        release.set()
        await first

        assert order == ["C1-M1", "C2-M2", "C1-M3"]
        assert ingestor.pending_count == 0
        assert ingestor.is_processing is False

    async def test_failure_does_not_stall_queue(
        self, ingestor: EventIngestor, scheduler: MagicMock
    ) -> None:
        scheduler.on_message_arrival.side_effect = [RuntimeError("boom"), None]

        await ingestor.admit(create_event(message_id="M1"))
        await ingestor.admit(create_event(message_id="M2"))

        assert scheduler.on_message_arrival.await_count == 2
        assert ingestor.is_processing is False

    async def test_stops_at_non_ready_head(
        self, ingestor: EventIngestor, bot: BotContext, scheduler: MagicMock
    ) -> None:
        bot.event_queue.append(
            PendingEvent(event=create_event(), status=EventStatus.PENDING)
        )

        await ingestor.drain()

        assert ingestor.pending_count == 1
        scheduler.on_message_arrival.assert_not_awaited()
