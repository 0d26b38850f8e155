"""Persistence infrastructure."""

from loopbot.infrastructure.persistence.channel_repository import (
    SQLiteChannelRepository,
)
from loopbot.infrastructure.persistence.database import DatabaseManager, create_schema
from loopbot.infrastructure.persistence.exceptions import (
    DatabaseError,
    PersistenceError,
)
from loopbot.infrastructure.persistence.message_repository import (
    SQLiteMessageRepository,
)
from loopbot.infrastructure.persistence.models import ChannelModel, MessageModel

__all__ = [
    "ChannelModel",
    "DatabaseError",
    "DatabaseManager",
    "MessageModel",
    "PersistenceError",
    "SQLiteChannelRepository",
    "SQLiteMessageRepository",
    "create_schema",
]
