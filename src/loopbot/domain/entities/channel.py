"""Channel entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Channel:
    """Channel entity.

    Attributes:
        id: Platform-specific channel ID.
        name: Channel name.
        platform: Platform name reported by the Satori server (e.g. "discord").
        self_id: The bot's own account ID on that platform.
    """

    id: str
    name: str
    platform: str = ""
    self_id: str = ""
