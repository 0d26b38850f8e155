"""Domain repositories."""

from loopbot.domain.repositories.channel_repository import ChannelRepository
from loopbot.domain.repositories.message_repository import MessageRepository

__all__ = [
    "ChannelRepository",
    "MessageRepository",
]
