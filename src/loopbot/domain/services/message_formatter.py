"""Formatting helpers for planner prompts and action results."""

import json
from typing import Any

from loopbot.domain.entities import ActionRecord, Channel, IncomingEvent

NO_CONTENT = "[No content]"


def format_incoming_event(event: IncomingEvent) -> str:
    """Format an incoming event as a single line.

    Args:
        event: Event to format.

    Returns:
        "- [channel] user: content"
    """
    channel = event.channel.name or event.channel.id
    return f"- [{channel}] {event.author_name}: {event.content or NO_CONTENT}"


def format_unread_events(events: list[IncomingEvent]) -> str:
    """Format unread events as "[user]: content" lines."""
    return "\n".join(
        f"[{event.author_name}]: {event.content or NO_CONTENT}" for event in events
    )


def format_action_history(actions: list[ActionRecord]) -> str:
    """Format action history with JSON-encoded actions and results."""
    return "\n".join(
        f"- Action: {_to_json(record.action)}, Result: {_to_json(record.result.result)}"
        for record in actions
    )


def format_unread_summary(unread_summary: dict[str, int]) -> str:
    """Format the per-channel unread count table."""
    return "\n".join(
        f"Channel ID:{channel_id}, Unread event count:{count}"
        for channel_id, count in unread_summary.items()
    )


def format_channel_list(channels: list[Channel]) -> str:
    """Format known channels, one per line."""
    return "\n".join(
        f"ID:{channel.id}, Name:{channel.name}, Platform:{channel.platform}"
        for channel in channels
    )


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)
