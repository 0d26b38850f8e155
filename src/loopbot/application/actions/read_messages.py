"""Read unread messages action."""

import logging

from loopbot.domain.entities import (
    ActionResult,
    ActionType,
    BotContext,
    CancellationToken,
    ChatContext,
    ReadUnreadMessagesAction,
)
from loopbot.domain.services import format_unread_events

logger = logging.getLogger(__name__)


class ReadUnreadMessagesActionHandler:
    """Format and drain the unread buffer of a channel."""

    name = ActionType.READ_UNREAD_MESSAGES.value
    description = "Read unread messages from a specific channel"

    async def execute(
        self,
        bot: BotContext,
        chat: ChatContext,
        action: ReadUnreadMessagesAction,
        token: CancellationToken,
    ) -> ActionResult:
        channel_id = action.channel_id

        if not channel_id:
            return ActionResult.failure(
                "System Error: No channelId provided for read_unread_messages."
            )

        events = bot.pop_unread(channel_id)
        if not events:
            return ActionResult.ok("System: No unread messages found.")

        logger.info(
            "Read %d unread events from channel %s", len(events), channel_id
        )
        return ActionResult.ok(
            f"System: Read {len(events)} unread events from channel {channel_id}:\n"
            f"{format_unread_events(events)}"
        )
