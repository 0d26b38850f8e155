"""Event ingestor: dedup, FIFO queue and per-channel routing."""

import logging

from loopbot.application.services import ChatSessionService, LoopScheduler
from loopbot.config import LoopConfig
from loopbot.domain.entities import (
    BotContext,
    Channel,
    ChatContext,
    EventStatus,
    IncomingEvent,
    Message,
    PendingEvent,
)
from loopbot.domain.repositories import ChannelRepository, MessageRepository

logger = logging.getLogger(__name__)


class EventIngestor:
    """Turns incoming events into a deduplicated, ordered work queue.

    Features:
    - At-most-once admission keyed by (channel_id, message_id).
    - Non-reentrant drain: only one drain owns the queue at a time.
    - Each event's channel cycle runs to completion before the next
      queued event (of any channel) is considered.
    """

    def __init__(
        self,
        bot: BotContext,
        sessions: ChatSessionService,
        scheduler: LoopScheduler,
        channel_repository: ChannelRepository,
        message_repository: MessageRepository,
        config: LoopConfig,
    ) -> None:
        """Initialize the ingestor.

        Args:
            bot: Process-wide context holding the queue and buffers.
            sessions: Chat context resolver.
            scheduler: Receives the message-triggered cycles.
            channel_repository: Records seen channels.
            message_repository: Records received messages.
            config: Loop limits.
        """
        self._bot = bot
        self._sessions = sessions
        self._scheduler = scheduler
        self._channel_repository = channel_repository
        self._message_repository = message_repository
        self._config = config

    @property
    def pending_count(self) -> int:
        """Number of queued events."""
        return len(self._bot.event_queue)

    @property
    def is_processing(self) -> bool:
        """Check if a drain is in progress."""
        return self._bot.processing

    async def admit(self, event: IncomingEvent) -> bool:
        """Admit an event and drain the queue.

        Args:
            event: Incoming event.

        Returns:
            True if the event was queued, False if it was dropped.
        """
        key = event.get_message_key()
        if key is None:
            logger.debug("Ignoring event without message: %s", event.id)
            return False

        if key in self._bot.processed_ids:
            logger.debug("Skipping already processed message: %s", key)
            return False
        self._bot.processed_ids.add(key)

        logger.info(
            "Received message from %s in channel [%s] %s: %s",
            event.author_id,
            event.platform,
            event.channel_id,
            event.content,
        )
        self._bot.event_queue.append(PendingEvent(event=event, status=EventStatus.READY))
        await self.drain()
        return True

    async def drain(self) -> None:
        """Process queued events in FIFO order.

        Returns immediately if another drain owns the queue.
        """
        if self._bot.processing:
            return
        self._bot.processing = True

        try:
            while self._bot.event_queue:
                pending = self._bot.event_queue[0]
                if pending.status is not EventStatus.READY:
                    break

                try:
                    await self._process(pending.event)
                except Exception:
                    logger.exception(
                        "Error processing event %s", pending.event.get_message_key()
                    )

                self._bot.event_queue.pop(0)
        finally:
            self._bot.processing = False

    async def _process(self, event: IncomingEvent) -> None:
        chat = await self._sessions.ensure(event.channel_id)
        if not chat.platform:
            chat.platform = event.platform
        if not chat.self_id:
            chat.self_id = event.self_id

        await self._record(chat, event)

        if event.author_id is not None and event.author_id == chat.self_id:
            logger.debug(
                "Skipping bot's own event in channel %s (message %s)",
                chat.channel_id,
                event.get_message_key(),
            )
            return

        self._bot.push_unread(
            chat.channel_id, event, self._config.max_unread_events
        )
        await self._scheduler.on_message_arrival(chat, event)

    async def _record(self, chat: ChatContext, event: IncomingEvent) -> None:
        """Persist channel and message.

        A failure propagates so drain() logs it and skips the event.
        """
        await self._channel_repository.save(
            Channel(
                id=chat.channel_id,
                name=event.channel.name or chat.channel_id,
                platform=chat.platform,
                self_id=chat.self_id,
            )
        )
        author = event.author
        if author is not None and event.content:
            await self._message_repository.save(
                Message(
                    channel_id=chat.channel_id,
                    user_id=author.id,
                    user_name=author.name or author.id,
                    content=event.content,
                    created_at=event.timestamp,
                )
            )
