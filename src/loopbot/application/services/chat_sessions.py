"""Chat context resolution."""

import logging

from loopbot.domain.entities import BotContext, ChatContext
from loopbot.domain.repositories import ChannelRepository

logger = logging.getLogger(__name__)


class ChatSessionService:
    """Resolves or lazily creates the ChatContext of a channel.

    New contexts are seeded with platform and self ID from the recorded
    channel, when one exists.
    """

    def __init__(
        self,
        bot: BotContext,
        channel_repository: ChannelRepository,
    ) -> None:
        """Initialize the service.

        Args:
            bot: Process-wide context owning the chat map.
            channel_repository: Repository of recorded channels.
        """
        self._bot = bot
        self._channel_repository = channel_repository

    async def ensure(self, channel_id: str) -> ChatContext:
        """Return the channel's ChatContext, creating it on first sight.

        Args:
            channel_id: Channel ID.

        Returns:
            The existing or newly created ChatContext.
        """
        existing = self._bot.chats.get(channel_id)
        if existing is not None:
            return existing

        try:
            channel = await self._channel_repository.find_by_id(channel_id)
        except Exception:
            logger.warning(
                "Failed to load channel %s, starting with empty platform info",
                channel_id,
                exc_info=True,
            )
            channel = None

        # 待機中に別の呼び出しが作成している可能性がある
        existing = self._bot.chats.get(channel_id)
        if existing is not None:
            return existing

        chat = ChatContext(
            channel_id=channel_id,
            platform=channel.platform if channel else "",
            self_id=channel.self_id if channel else "",
        )
        self._bot.chats[channel_id] = chat
        logger.debug(
            "Created chat context: channel=%s, platform=%s, self_id=%s, found_in_db=%s",
            channel_id,
            chat.platform,
            chat.self_id,
            channel is not None,
        )
        return chat
