"""Application services."""

from loopbot.application.services.chat_sessions import ChatSessionService
from loopbot.application.services.loop_scheduler import CycleOutcome, LoopScheduler

__all__ = ["ChatSessionService", "CycleOutcome", "LoopScheduler"]
