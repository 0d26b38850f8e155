"""Satori event handlers."""

import logging

from loopbot.domain.entities import IncomingEvent, ReadyEvent
from loopbot.infrastructure.events import EventIngestor
from loopbot.infrastructure.satori import SatoriClient

logger = logging.getLogger(__name__)

MESSAGE_CREATED = "message-created"


def register_handlers(client: SatoriClient, ingestor: EventIngestor) -> None:
    """Register Satori event handlers.

    Args:
        client: SatoriClient instance.
        ingestor: Event ingestor receiving new messages.
    """

    async def handle_ready(event: ReadyEvent) -> None:
        """Log the logins reported by the READY signal."""
        for login in event.logins:
            logger.info(
                "Logged in: platform=%s, self_id=%s, status=%s",
                login.platform,
                login.self_id,
                login.status,
            )

    async def handle_message_created(event: IncomingEvent) -> None:
        """Admit a new message into the ingestor.

        Args:
            event: Incoming message event.
        """
        logger.debug(
            "Received message: channel=%s, user=%s, message=%s",
            event.channel_id,
            event.author_id,
            event.message.id if event.message else None,
        )
        admitted = await ingestor.admit(event)
        if not admitted:
            logger.debug("Event not admitted: %s", event.get_message_key())

    client.on_ready(handle_ready)
    client.on(MESSAGE_CREATED, handle_message_created)
