"""Event system infrastructure."""

from loopbot.infrastructure.events.ingestor import EventIngestor
from loopbot.infrastructure.events.scheduler import SweepScheduler

__all__ = [
    "EventIngestor",
    "SweepScheduler",
]
