"""Satori infrastructure."""

from loopbot.infrastructure.satori.client import SatoriClient
from loopbot.infrastructure.satori.event_adapter import (
    to_incoming_event,
    to_ready_event,
)
from loopbot.infrastructure.satori.exceptions import SatoriApiError, SatoriError
from loopbot.infrastructure.satori.messaging import SatoriMessagingService

__all__ = [
    "SatoriApiError",
    "SatoriClient",
    "SatoriError",
    "SatoriMessagingService",
    "to_incoming_event",
    "to_ready_event",
]
