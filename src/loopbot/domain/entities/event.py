"""Event entities delivered by the event source."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from loopbot.domain.entities.channel import Channel
from loopbot.domain.entities.user import User


class EventStatus(Enum):
    """Status of a queued event."""

    PENDING = "pending"
    READY = "ready"


@dataclass(frozen=True)
class MessageBody:
    """Message payload of an event.

    Attributes:
        id: Platform-specific message ID.
        content: Message content.
    """

    id: str
    content: str = ""


@dataclass(frozen=True)
class IncomingEvent:
    """Typed event from the event source.

    Attributes:
        id: Event sequence ID.
        type: Event type (e.g. "message-created").
        platform: Platform name.
        self_id: The bot's account ID on that platform.
        channel: Channel where the event happened.
        user: Author of the message.
        member_user: Guild member user (fallback author).
        message: Message payload.
        timestamp: When the event was received.
    """

    id: str
    type: str
    platform: str
    self_id: str
    channel: Channel
    user: User | None = None
    member_user: User | None = None
    message: MessageBody | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def channel_id(self) -> str:
        return self.channel.id

    @property
    def author(self) -> User | None:
        return self.user or self.member_user

    @property
    def author_id(self) -> str | None:
        author = self.author
        return author.id if author else None

    @property
    def author_name(self) -> str:
        author = self.author
        if author is None:
            return "unknown"
        return author.name or author.id

    @property
    def content(self) -> str:
        return self.message.content if self.message else ""

    def get_message_key(self) -> tuple[str, str] | None:
        """Get identity key for duplicate detection.

        Returns:
            (channel_id, message_id), or None if the event has no message.
        """
        if self.message is None:
            return None
        return (self.channel.id, self.message.id)


@dataclass(frozen=True)
class Login:
    """A connected login reported by the ready event."""

    platform: str
    self_id: str
    status: str = ""


@dataclass(frozen=True)
class ReadyEvent:
    """Ready event listing connected logins."""

    logins: list[Login] = field(default_factory=list)


@dataclass
class PendingEvent:
    """Queued event awaiting the ingestor drain.

    Attributes:
        event: The queued event.
        status: Only READY events are drained.
    """

    event: IncomingEvent
    status: EventStatus = EventStatus.READY
