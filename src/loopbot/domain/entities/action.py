"""Action entities.

The planner answers with a JSON object such as
``{"action": "send_message", "channelId": "123", "content": "hi"}``.
Each action name maps to one pydantic model; together they form the
``Action`` discriminated union keyed by the ``action`` field.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ActionType(str, Enum):
    """Names of the standard actions."""

    CONTINUE = "continue"
    BREAK = "break"
    SLEEP = "sleep"
    LIST_CHANNELS = "list_channels"
    SEND_MESSAGE = "send_message"
    READ_UNREAD_MESSAGES = "read_unread_messages"


class _ActionModel(BaseModel):
    """Base model for action payloads.

    Accepts camelCase aliases and keeps unknown fields, because planner
    output is not under our control.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


class ContinueAction(_ActionModel):
    """Wait for the next trigger."""

    action: Literal["continue"]


class BreakAction(_ActionModel):
    """Clear memory and go idle."""

    action: Literal["break"]


class SleepAction(_ActionModel):
    """Sleep for a while, then keep acting.

    Attributes:
        duration: Sleep duration in milliseconds.
        seconds: Sleep duration in seconds (used when duration is absent).
    """

    action: Literal["sleep"]
    duration: float | None = Field(default=None, ge=0)
    seconds: float | None = Field(default=None, ge=0)

    def duration_seconds(self, default: float) -> float:
        """Resolve the sleep duration in seconds.

        Args:
            default: Fallback duration in seconds.

        Returns:
            Duration in seconds.
        """
        if self.duration is not None:
            return self.duration / 1000
        if self.seconds is not None:
            return self.seconds
        return default


class ListChannelsAction(_ActionModel):
    """List known channels."""

    action: Literal["list_channels"]


class SendMessageAction(_ActionModel):
    """Send a message to a channel."""

    action: Literal["send_message"]
    channel_id: str = Field(alias="channelId")
    content: str


class ReadUnreadMessagesAction(_ActionModel):
    """Read and drain the unread buffer of a channel."""

    action: Literal["read_unread_messages"]
    channel_id: str | None = Field(default=None, alias="channelId")


Action = Annotated[
    Union[
        ContinueAction,
        BreakAction,
        SleepAction,
        ListChannelsAction,
        SendMessageAction,
        ReadUnreadMessagesAction,
    ],
    Field(discriminator="action"),
]

_action_adapter: TypeAdapter[Action] = TypeAdapter(Action)


def parse_action(payload: dict[str, Any]) -> Action:
    """Validate a flat action payload into its typed variant.

    Args:
        payload: Action payload from the planner.

    Returns:
        The matching action model.

    Raises:
        pydantic.ValidationError: If the payload is not a valid action.
    """
    return _action_adapter.validate_python(payload)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of executing an action.

    Attributes:
        success: Whether the action succeeded.
        should_continue: Whether the scheduler should run another cycle now.
        result: Human-readable outcome shown to the planner next cycle.
    """

    success: bool
    should_continue: bool
    result: Any = None

    @classmethod
    def ok(cls, result: Any, *, should_continue: bool = True) -> "ActionResult":
        return cls(success=True, should_continue=should_continue, result=result)

    @classmethod
    def failure(cls, result: Any, *, should_continue: bool = True) -> "ActionResult":
        return cls(success=False, should_continue=should_continue, result=result)


@dataclass(frozen=True)
class ActionRecord:
    """An executed action and its result, kept in the channel history."""

    action: dict[str, Any]
    result: ActionResult
