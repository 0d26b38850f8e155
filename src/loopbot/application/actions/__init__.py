"""Action registry, dispatcher and standard action handlers."""

from loopbot.application.actions.dispatcher import ActionDispatcher
from loopbot.application.actions.read_messages import ReadUnreadMessagesActionHandler
from loopbot.application.actions.registry import ActionHandler, ActionRegistry
from loopbot.application.actions.send_message import SendMessageActionHandler
from loopbot.application.actions.system import (
    BreakActionHandler,
    ContinueActionHandler,
    ListChannelsActionHandler,
    SleepActionHandler,
)
from loopbot.domain.repositories import ChannelRepository, MessageRepository
from loopbot.domain.services import MessagingService


def create_default_registry(
    messaging_service: MessagingService,
    channel_repository: ChannelRepository,
    message_repository: MessageRepository,
    bot_name: str,
    sleep_duration_seconds: float,
) -> ActionRegistry:
    """Build a frozen registry with the standard actions.

    Args:
        messaging_service: Message-send RPC of the event source.
        channel_repository: Repository for listing channels.
        message_repository: Repository for recording outgoing messages.
        bot_name: Author name recorded for outgoing messages.
        sleep_duration_seconds: Default duration of the sleep action.

    Returns:
        Frozen ActionRegistry.
    """
    registry = ActionRegistry()
    registry.register(ContinueActionHandler())
    registry.register(BreakActionHandler())
    registry.register(SleepActionHandler(sleep_duration_seconds))
    registry.register(ListChannelsActionHandler(channel_repository))
    registry.register(
        SendMessageActionHandler(messaging_service, message_repository, bot_name)
    )
    registry.register(ReadUnreadMessagesActionHandler())
    registry.freeze()
    return registry


__all__ = [
    "ActionDispatcher",
    "ActionHandler",
    "ActionRegistry",
    "BreakActionHandler",
    "ContinueActionHandler",
    "ListChannelsActionHandler",
    "ReadUnreadMessagesActionHandler",
    "SendMessageActionHandler",
    "SleepActionHandler",
    "create_default_registry",
]
