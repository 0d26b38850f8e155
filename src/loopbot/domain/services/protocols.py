"""Domain service protocols."""

from typing import Any, Protocol

from loopbot.domain.entities import (
    ActionRecord,
    CancellationToken,
    GenerationResult,
    IncomingEvent,
)


class MessagingService(Protocol):
    """Messaging abstraction (platform-independent).

    This protocol defines the interface for sending messages
    through the event source's message-send RPC.
    """

    async def send_message(
        self,
        platform: str,
        self_id: str,
        channel_id: str,
        content: str,
    ) -> None:
        """Send a message to a channel.

        Args:
            platform: Platform name.
            self_id: The bot's account ID on that platform.
            channel_id: Target channel ID.
            content: Message content.
        """
        ...


class TextGenerator(Protocol):
    """Text generation abstraction (LLM chat completion)."""

    async def complete(self, messages: list[dict[str, str]]) -> GenerationResult:
        """Generate text from OpenAI-format messages.

        Args:
            messages: [{"role": "system", "content": "..."}, ...]

        Returns:
            Generated text and metrics.
        """
        ...


class ActionPlanner(Protocol):
    """Decides the next action for a channel."""

    async def decide(
        self,
        messages: list[dict[str, str]],
        actions: list[ActionRecord],
        unread_summary: dict[str, int],
        incoming_event: IncomingEvent | None,
        token: CancellationToken,
    ) -> dict[str, Any]:
        """Decide the next action.

        Args:
            messages: Conversation history of the channel.
            actions: Action history of the channel.
            unread_summary: Unread event count per channel.
            incoming_event: Event that triggered this cycle, if any.
            token: Cancellation token of the cycle.

        Returns:
            Flat action payload ({"action": ..., ...fields}).
        """
        ...
