"""Domain entities."""

from loopbot.domain.entities.action import (
    Action,
    ActionRecord,
    ActionResult,
    ActionType,
    BreakAction,
    ContinueAction,
    ListChannelsAction,
    ReadUnreadMessagesAction,
    SendMessageAction,
    SleepAction,
    parse_action,
)
from loopbot.domain.entities.cancellation import CancellationToken
from loopbot.domain.entities.channel import Channel
from loopbot.domain.entities.context import BotContext, ChatContext
from loopbot.domain.entities.event import (
    EventStatus,
    IncomingEvent,
    Login,
    MessageBody,
    PendingEvent,
    ReadyEvent,
)
from loopbot.domain.entities.llm_result import GenerationResult, LLMMetrics
from loopbot.domain.entities.message import Message
from loopbot.domain.entities.user import User

__all__ = [
    "Action",
    "ActionRecord",
    "ActionResult",
    "ActionType",
    "BotContext",
    "BreakAction",
    "CancellationToken",
    "Channel",
    "ChatContext",
    "ContinueAction",
    "EventStatus",
    "GenerationResult",
    "IncomingEvent",
    "LLMMetrics",
    "ListChannelsAction",
    "Login",
    "Message",
    "MessageBody",
    "PendingEvent",
    "ReadUnreadMessagesAction",
    "ReadyEvent",
    "SendMessageAction",
    "SleepAction",
    "User",
    "parse_action",
]
