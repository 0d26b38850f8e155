"""Domain services."""

from loopbot.domain.services.message_formatter import (
    format_action_history,
    format_channel_list,
    format_incoming_event,
    format_unread_events,
    format_unread_summary,
)
from loopbot.domain.services.protocols import (
    ActionPlanner,
    MessagingService,
    TextGenerator,
)

__all__ = [
    "ActionPlanner",
    "MessagingService",
    "TextGenerator",
    "format_action_history",
    "format_channel_list",
    "format_incoming_event",
    "format_unread_events",
    "format_unread_summary",
]
