"""Send message action."""

import logging

from loopbot.domain.entities import (
    ActionResult,
    ActionType,
    BotContext,
    CancellationToken,
    ChatContext,
    Message,
    SendMessageAction,
)
from loopbot.domain.exceptions import CycleCancelledError
from loopbot.domain.repositories import MessageRepository
from loopbot.domain.services import MessagingService

logger = logging.getLogger(__name__)

BOT_USER_ID = "bot"

INTERRUPT_RESULT = (
    "System: [INTERRUPT] Message sending ABORTED. New unread messages were "
    "detected from the user. Please [read_unread_messages] first to understand "
    "the new context."
)


class SendMessageActionHandler:
    """Send a message, unless new messages arrived while reasoning."""

    name = ActionType.SEND_MESSAGE.value
    description = "Send a message to a specific channel"

    def __init__(
        self,
        messaging_service: MessagingService,
        message_repository: MessageRepository,
        bot_name: str,
    ) -> None:
        """Initialize the handler.

        Args:
            messaging_service: Message-send RPC of the event source.
            message_repository: Repository for recording outgoing messages.
            bot_name: Author name recorded for outgoing messages.
        """
        self._messaging_service = messaging_service
        self._message_repository = message_repository
        self._bot_name = bot_name

    async def execute(
        self,
        bot: BotContext,
        chat: ChatContext,
        action: SendMessageAction,
        token: CancellationToken,
    ) -> ActionResult:
        channel_id = action.channel_id
        content = action.content

        # 推論中に新着があれば古い文脈での返信を中止する
        if bot.has_unread(channel_id):
            logger.warning(
                "Aborting message send to %s due to new incoming events", channel_id
            )
            return ActionResult.failure(INTERRUPT_RESULT)

        target = bot.chats.get(channel_id, chat)
        try:
            await token.run(
                self._messaging_service.send_message(
                    target.platform, target.self_id, channel_id, content
                )
            )
        except CycleCancelledError:
            raise
        except Exception as e:
            logger.error("Failed to send message to %s: %s", channel_id, e)
            return ActionResult.failure(f"System: Error sending message: {e}")

        try:
            await self._message_repository.save(
                Message(
                    channel_id=channel_id,
                    user_id=BOT_USER_ID,
                    user_name=self._bot_name,
                    content=content,
                )
            )
        except Exception:
            logger.exception("Error saving outgoing message to DB")

        target.messages.append({"role": "assistant", "content": content})

        return ActionResult.ok(f"System: Message sent to {channel_id}: {content}")
