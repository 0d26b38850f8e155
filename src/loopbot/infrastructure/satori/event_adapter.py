"""Convert Satori wire payloads to domain entities."""

from datetime import datetime, timezone
from typing import Any

from loopbot.domain.entities import (
    Channel,
    IncomingEvent,
    Login,
    MessageBody,
    ReadyEvent,
    User,
)


def _to_user(data: dict[str, Any] | None) -> User | None:
    if not data or not data.get("id"):
        return None
    user_id = str(data["id"])
    name = data.get("name") or data.get("nick") or user_id
    return User(id=user_id, name=name, is_bot=bool(data.get("is_bot", False)))


def _to_timestamp(value: Any) -> datetime:
    # Satori のタイムスタンプはミリ秒
    if isinstance(value, (int, float)) and value > 0:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return datetime.now(timezone.utc)


def to_incoming_event(body: dict[str, Any]) -> IncomingEvent | None:
    """Convert an EVENT body to an IncomingEvent.

    Args:
        body: Body of an op 0 (EVENT) signal.

    Returns:
        IncomingEvent, or None if the event has no channel.
    """
    channel_data = body.get("channel") or {}
    if not channel_data.get("id"):
        return None

    login = body.get("login") or {}
    login_user = login.get("user") or {}
    self_id = body.get("self_id") or login.get("self_id") or login_user.get("id") or ""
    platform = body.get("platform") or login.get("platform") or ""

    member = body.get("member") or {}
    message_data = body.get("message")
    message = None
    if message_data and message_data.get("id") is not None:
        message = MessageBody(
            id=str(message_data["id"]),
            content=message_data.get("content") or "",
        )

    return IncomingEvent(
        id=str(body.get("sn", body.get("id", ""))),
        type=body.get("type", ""),
        platform=platform,
        self_id=str(self_id),
        channel=Channel(
            id=str(channel_data["id"]),
            name=channel_data.get("name") or "",
            platform=platform,
            self_id=str(self_id),
        ),
        user=_to_user(body.get("user")),
        member_user=_to_user(member.get("user")),
        message=message,
        timestamp=_to_timestamp(body.get("timestamp")),
    )


def to_ready_event(body: dict[str, Any]) -> ReadyEvent:
    """Convert a READY body to a ReadyEvent.

    Args:
        body: Body of an op 4 (READY) signal.

    Returns:
        ReadyEvent listing connected logins.
    """
    logins = []
    for login in body.get("logins") or []:
        user = login.get("user") or {}
        logins.append(
            Login(
                platform=login.get("platform") or "",
                self_id=str(login.get("self_id") or user.get("id") or ""),
                status=str(login.get("status", "")),
            )
        )
    return ReadyEvent(logins=logins)
