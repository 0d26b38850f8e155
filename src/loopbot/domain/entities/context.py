"""Bot and chat context entities.

These are plain in-memory state holders. ``BotContext`` lives for the whole
process; one ``ChatContext`` per channel is created on demand and never
removed. All buffers are bounded so memory stays flat.
"""

from dataclasses import dataclass, field
from typing import Any

from loopbot.domain.entities.action import ActionRecord
from loopbot.domain.entities.cancellation import CancellationToken
from loopbot.domain.entities.event import IncomingEvent, PendingEvent

TRIM_NOTICE_PREFIX = "System:"


def _truncate(value: Any, length: int) -> str:
    text = value if isinstance(value, str) else str(value)
    return text[:length]


@dataclass
class ChatContext:
    """Per-channel state.

    Attributes:
        channel_id: Channel ID.
        platform: Platform name.
        self_id: The bot's own account ID on the platform.
        messages: Conversation turns in OpenAI format ({"role", "content"}).
        actions: Executed actions and their results.
        current_token: Token of the single in-flight cycle, if any.
    """

    channel_id: str
    platform: str = ""
    self_id: str = ""
    messages: list[dict[str, str]] = field(default_factory=list)
    actions: list[ActionRecord] = field(default_factory=list)
    current_token: CancellationToken | None = None

    def trim_messages(self, max_messages: int, keep: int) -> bool:
        """Trim conversation history when it exceeds ``max_messages``.

        Keeps the most recent ``keep`` turns and appends a notice recording
        how much history was discarded.

        Returns:
            True if the history was trimmed.
        """
        if len(self.messages) <= max_messages:
            return False
        before = len(self.messages)
        self.messages = self.messages[-keep:] if keep > 0 else []
        self.messages.append(
            {
                "role": "user",
                "content": (
                    f"{TRIM_NOTICE_PREFIX} Approaching the context limit, "
                    f"conversation history reduced from {before} to "
                    f"{len(self.messages)} messages. Earlier history may be lost."
                ),
            }
        )
        return True

    def trim_actions(self, max_actions: int, keep: int) -> bool:
        """Trim action history when it exceeds ``max_actions``.

        The notice goes to ``messages`` so ``actions`` holds exactly ``keep``
        records afterwards.

        Returns:
            True if the history was trimmed.
        """
        if len(self.actions) <= max_actions:
            return False
        before = len(self.actions)
        self.actions = self.actions[-keep:] if keep > 0 else []
        self.messages.append(
            {
                "role": "user",
                "content": (
                    f"{TRIM_NOTICE_PREFIX} Approaching the context limit, "
                    f"action history reduced from {before} to {len(self.actions)} "
                    "actions. Earlier actions may be lost."
                ),
            }
        )
        return True

    def replace_token(self, token: CancellationToken) -> None:
        """Cancel the in-flight cycle (if any) and install ``token``."""
        if self.current_token is not None:
            self.current_token.cancel()
        self.current_token = token

    def release_token(self, token: CancellationToken) -> bool:
        """Clear the token slot only if it still holds ``token``.

        Returns:
            True if the slot was cleared.
        """
        if self.current_token is token:
            self.current_token = None
            return True
        return False

    def reset(self) -> None:
        """Forget conversation and action history."""
        self.messages = []
        self.actions = []


@dataclass
class BotContext:
    """Process-wide state.

    Attributes:
        event_queue: FIFO of events awaiting the ingestor drain.
        unread_events: Unread buffer per channel ID.
        processed_ids: Message keys already admitted.
        chats: Chat contexts per channel ID.
        processing: True while the ingestor drains the queue.
        last_interacted_channel_ids: Recently touched channels, oldest first.
        current_processing_started_at: Monotonic start time of the latest cycle.
    """

    event_queue: list[PendingEvent] = field(default_factory=list)
    unread_events: dict[str, list[IncomingEvent]] = field(default_factory=dict)
    processed_ids: set[tuple[str, str]] = field(default_factory=set)
    chats: dict[str, ChatContext] = field(default_factory=dict)
    processing: bool = False
    last_interacted_channel_ids: list[str] = field(default_factory=list)
    current_processing_started_at: float | None = None

    def push_unread(self, channel_id: str, event: IncomingEvent, limit: int) -> None:
        """Buffer an unread event, dropping the oldest beyond ``limit``."""
        events = self.unread_events.get(channel_id)
        if not isinstance(events, list):
            events = []
        events.append(event)
        if len(events) > limit:
            events = events[-limit:]
        self.unread_events[channel_id] = events

    def pop_unread(self, channel_id: str) -> list[IncomingEvent]:
        """Remove and return the unread buffer of a channel."""
        return self.unread_events.pop(channel_id, None) or []

    def has_unread(self, channel_id: str) -> bool:
        return bool(self.unread_events.get(channel_id))

    def unread_summary(self) -> dict[str, int]:
        """Unread event count per channel."""
        return {
            channel_id: len(events)
            for channel_id, events in self.unread_events.items()
        }

    def total_unread(self) -> int:
        return sum(len(events) for events in self.unread_events.values())

    def channels_with_unread(self) -> list[str]:
        return [
            channel_id for channel_id, events in self.unread_events.items() if events
        ]

    def touch_channel(self, channel_id: str, limit: int) -> None:
        """Record a channel as recently interacted with."""
        if channel_id not in self.last_interacted_channel_ids:
            self.last_interacted_channel_ids.append(channel_id)
        if len(self.last_interacted_channel_ids) > limit:
            self.last_interacted_channel_ids = self.last_interacted_channel_ids[
                -limit:
            ]

    def debug_summary(self, chat: ChatContext | None = None) -> dict[str, Any]:
        """Summarize state for debug logging.

        Args:
            chat: Optional chat context to include.

        Returns:
            Dict of queue/unread counts and recent chat history.
        """
        summary: dict[str, Any] = {
            "event_queue_length": len(self.event_queue),
            "unread_events": self.unread_summary(),
            "total_unread_count": self.total_unread(),
        }
        if chat is not None:
            summary["channel_id"] = chat.channel_id
            summary["total_messages_in_context"] = len(chat.messages)
            summary["total_actions_in_context"] = len(chat.actions)
            summary["last_messages"] = [
                {
                    "role": msg.get("role"),
                    "content": _truncate(msg.get("content", ""), 50),
                }
                for msg in chat.messages[-3:]
            ]
            summary["last_actions"] = [
                {
                    "action": record.action.get("action"),
                    "result": _truncate(record.result.result, 100),
                }
                for record in chat.actions[-3:]
            ]
        return summary
