"""Message entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Message:
    """Persisted chat line.

    Attributes:
        channel_id: Channel where the message was posted.
        user_id: Author ID ("bot" for the bot's own outgoing messages).
        user_name: Author display name.
        content: Message content.
        created_at: When the message was recorded.
    """

    channel_id: str
    user_id: str
    user_name: str
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
