"""Per-channel reasoning/acting loop.

Two triggers drive ``step``: the event ingestor right after an event is
buffered, and the periodic sweep over channels with unread events. Each
channel holds at most one live cancellation token; starting a cycle cancels
whatever cycle currently owns it.
"""

import asyncio
import logging
from enum import Enum

from loopbot.application.actions import ActionDispatcher
from loopbot.application.services.chat_sessions import ChatSessionService
from loopbot.config import LoopConfig
from loopbot.domain.entities import (
    ActionRecord,
    BotContext,
    CancellationToken,
    ChatContext,
    IncomingEvent,
)
from loopbot.domain.exceptions import CycleCancelledError
from loopbot.domain.services import ActionPlanner

logger = logging.getLogger(__name__)


class CycleOutcome(Enum):
    """How a cycle ended."""

    IDLE = "idle"
    CANCELLED = "cancelled"
    FAILED = "failed"


class LoopScheduler:
    """Drives planner and dispatcher for one channel at a time."""

    def __init__(
        self,
        bot: BotContext,
        sessions: ChatSessionService,
        planner: ActionPlanner,
        dispatcher: ActionDispatcher,
        config: LoopConfig,
    ) -> None:
        """Initialize the scheduler.

        Args:
            bot: Process-wide context.
            sessions: Chat context resolver.
            planner: Decides the next action.
            dispatcher: Executes decided actions.
            config: Loop limits and delays.
        """
        self._bot = bot
        self._sessions = sessions
        self._planner = planner
        self._dispatcher = dispatcher
        self._config = config

    async def on_message_arrival(
        self, chat: ChatContext, event: IncomingEvent
    ) -> CycleOutcome:
        """Message-triggered entry point.

        Args:
            chat: Context of the event's channel.
            event: The event that was just buffered.

        Returns:
            How the cycle ended.
        """
        logger.info("Triggering immediate reaction for channel %s", chat.channel_id)
        return await self.step(chat, event)

    async def sweep(self) -> None:
        """Periodic entry point.

        Runs a cycle for every channel with unread events, one channel at a
        time. A failure in one channel does not stop the sweep.
        """
        channel_ids = self._bot.channels_with_unread()
        if not channel_ids:
            logger.debug("No channels with unread events, skipping periodic check")
            return

        logger.info("Processing %d channels with unread events", len(channel_ids))
        for channel_id in channel_ids:
            try:
                chat = await self._sessions.ensure(channel_id)
                await self.step(chat)
            except Exception:
                logger.exception(
                    "Error processing channel %s in periodic loop", channel_id
                )

    async def step(
        self,
        chat: ChatContext,
        incoming_event: IncomingEvent | None = None,
    ) -> CycleOutcome:
        """Run one cycle: reason, act, and keep going while asked to.

        Args:
            chat: Context of the channel.
            incoming_event: Event attached to the first reasoning turn.

        Returns:
            How the cycle ended.
        """
        token = CancellationToken()
        chat.replace_token(token)
        self._bot.current_processing_started_at = asyncio.get_running_loop().time()
        self._bot.touch_channel(
            chat.channel_id, self._config.max_recent_interacted_channels
        )

        event = incoming_event
        try:
            while True:
                self._trim(chat)

                payload = await self._planner.decide(
                    chat.messages,
                    chat.actions,
                    self._bot.unread_summary(),
                    event,
                    token,
                )
                event = None
                token.raise_if_cancelled()

                result = await self._dispatcher.dispatch(chat, payload, token)
                token.raise_if_cancelled()
                chat.actions.append(ActionRecord(action=payload, result=result))

                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Cycle state: %s", self._bot.debug_summary(chat))

                if not result.should_continue:
                    return CycleOutcome.IDLE

                await token.sleep(self._config.loop_continue_delay_seconds)
        except CycleCancelledError:
            logger.info(
                "Cycle for channel %s was interrupted by a newer cycle",
                chat.channel_id,
            )
            return CycleOutcome.CANCELLED
        except Exception:
            logger.exception("Error in cycle for channel %s", chat.channel_id)
            return CycleOutcome.FAILED
        finally:
            if chat.release_token(token):
                self._bot.current_processing_started_at = None

    def _trim(self, chat: ChatContext) -> None:
        config = self._config
        if chat.trim_messages(
            config.max_messages_in_context, config.messages_keep_on_trim
        ):
            logger.info("Trimmed conversation history of %s", chat.channel_id)
        if chat.trim_actions(config.max_actions_in_context, config.actions_keep_on_trim):
            logger.info("Trimmed action history of %s", chat.channel_id)
