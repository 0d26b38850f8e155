"""Control-flow and housekeeping actions."""

import logging

from loopbot.domain.entities import (
    ActionResult,
    ActionType,
    BotContext,
    BreakAction,
    CancellationToken,
    ChatContext,
    ContinueAction,
    ListChannelsAction,
    SleepAction,
)
from loopbot.domain.repositories import ChannelRepository
from loopbot.domain.services import format_channel_list

logger = logging.getLogger(__name__)


class ContinueActionHandler:
    """Stop acting and wait for the next trigger."""

    name = ActionType.CONTINUE.value
    description = "Wait for new messages"

    async def execute(
        self,
        bot: BotContext,
        chat: ChatContext,
        action: ContinueAction,
        token: CancellationToken,
    ) -> ActionResult:
        return ActionResult.ok(
            "System: Acknowledged, will now wait for user input.",
            should_continue=False,
        )


class BreakActionHandler:
    """Clear conversation and action history, then go idle."""

    name = ActionType.BREAK.value
    description = "Clear memory and take a break"

    async def execute(
        self,
        bot: BotContext,
        chat: ChatContext,
        action: BreakAction,
        token: CancellationToken,
    ) -> ActionResult:
        chat.reset()
        logger.info("Memory cleared for channel %s", chat.channel_id)
        return ActionResult.ok(
            "System: Memory cleared. Loop broken.", should_continue=False
        )


class SleepActionHandler:
    """Suspend the cycle, then keep acting."""

    name = ActionType.SLEEP.value
    description = "Sleep for a while"

    def __init__(self, default_seconds: float) -> None:
        """Initialize the handler.

        Args:
            default_seconds: Duration used when the payload gives none.
        """
        self._default_seconds = default_seconds

    async def execute(
        self,
        bot: BotContext,
        chat: ChatContext,
        action: SleepAction,
        token: CancellationToken,
    ) -> ActionResult:
        seconds = action.duration_seconds(self._default_seconds)
        logger.debug("Sleeping %.1fs in channel %s", seconds, chat.channel_id)
        await token.sleep(seconds)
        return ActionResult.ok(f"System: Slept for {seconds:g} seconds.")


class ListChannelsActionHandler:
    """List known channels from persistence."""

    name = ActionType.LIST_CHANNELS.value
    description = "List all available channels"

    def __init__(self, channel_repository: ChannelRepository) -> None:
        """Initialize the handler.

        Args:
            channel_repository: Repository holding recorded channels.
        """
        self._channel_repository = channel_repository

    async def execute(
        self,
        bot: BotContext,
        chat: ChatContext,
        action: ListChannelsAction,
        token: CancellationToken,
    ) -> ActionResult:
        channels = await token.run(self._channel_repository.find_all())
        return ActionResult.ok(
            f"System: Channel List:\n{format_channel_list(channels)}"
        )
