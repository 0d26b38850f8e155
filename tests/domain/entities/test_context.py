"""Tests for BotContext and ChatContext."""

from loopbot.domain.entities import (
    ActionRecord,
    ActionResult,
    BotContext,
    CancellationToken,
    ChatContext,
)
from tests.factories import create_event


def create_messages(count: int) -> list[dict[str, str]]:
    return [{"role": "user", "content": f"message {i}"} for i in range(count)]


def create_actions(count: int) -> list[ActionRecord]:
    return [
        ActionRecord(action={"action": "continue"}, result=ActionResult.ok(str(i)))
        for i in range(count)
    ]


class TestChatContextTrimMessages:
    """trim_messages tests."""

    def test_no_trim_within_limit(self) -> None:
        """Test that history at the limit is left alone."""
        chat = ChatContext(channel_id="C1", messages=create_messages(20))

        assert chat.trim_messages(20, 5) is False
        assert len(chat.messages) == 20

    def test_trim_keeps_latest_and_appends_notice(self) -> None:
        """Test that trimming keeps the newest turns plus one notice."""
        chat = ChatContext(channel_id="C1", messages=create_messages(21))

        assert chat.trim_messages(20, 5) is True

        assert len(chat.messages) == 6
        assert [m["content"] for m in chat.messages[:5]] == [
            f"message {i}" for i in range(16, 21)
        ]
        notice = chat.messages[-1]
        assert notice["role"] == "user"
        assert notice["content"].startswith("System:")
        assert "21" in notice["content"]

    def test_trim_with_zero_keep(self) -> None:
        """Test that keep=0 leaves only the notice."""
        chat = ChatContext(channel_id="C1", messages=create_messages(3))

        chat.trim_messages(2, 0)

        assert len(chat.messages) == 1


class TestChatContextTrimActions:
    """trim_actions tests."""

    def test_no_trim_within_limit(self) -> None:
        """Test that history at the limit is left alone."""
        chat = ChatContext(channel_id="C1", actions=create_actions(50))

        assert chat.trim_actions(50, 20) is False
        assert len(chat.actions) == 50
        assert chat.messages == []

    def test_trim_keeps_latest_and_notifies_in_messages(self) -> None:
        """Test that the notice goes to messages, not actions."""
        chat = ChatContext(channel_id="C1", actions=create_actions(51))

        assert chat.trim_actions(50, 20) is True

        assert len(chat.actions) == 20
        assert chat.actions[0].result.result == "31"
        assert chat.actions[-1].result.result == "50"
        assert len(chat.messages) == 1
        assert "action history" in chat.messages[0]["content"]


class TestChatContextToken:
    """replace_token / release_token tests."""

    def test_replace_cancels_previous(self) -> None:
        """Test that installing a new token cancels the old one."""
        chat = ChatContext(channel_id="C1")
        first = CancellationToken()
        second = CancellationToken()

        chat.replace_token(first)
        chat.replace_token(second)

        assert first.cancelled
        assert not second.cancelled
        assert chat.current_token is second

    def test_release_only_own_token(self) -> None:
        """Test that a stale token cannot clear the slot."""
        chat = ChatContext(channel_id="C1")
        first = CancellationToken()
        second = CancellationToken()
        chat.replace_token(first)
        chat.replace_token(second)

        assert chat.release_token(first) is False
        assert chat.current_token is second
        assert chat.release_token(second) is True
        assert chat.current_token is None

    def test_reset_clears_history(self) -> None:
        """Test that reset forgets messages and actions."""
        chat = ChatContext(
            channel_id="C1", messages=create_messages(2), actions=create_actions(2)
        )

        chat.reset()

        assert chat.messages == []
        assert chat.actions == []


class TestBotContextUnread:
    """Unread buffer tests."""

    def test_push_unread_bounded(self) -> None:
        """Test that the buffer keeps only the newest events."""
        bot = BotContext()
        for i in range(25):
            bot.push_unread("C1", create_event(message_id=f"M{i}"), limit=20)

        events = bot.unread_events["C1"]
        assert len(events) == 20
        assert events[0].message is not None
        assert events[0].message.id == "M5"
        assert events[-1].message is not None
        assert events[-1].message.id == "M24"

    def test_pop_unread_drains(self) -> None:
        """Test that pop_unread returns and removes the buffer."""
        bot = BotContext()
        bot.push_unread("C1", create_event(), limit=20)

        events = bot.pop_unread("C1")

        assert len(events) == 1
        assert not bot.has_unread("C1")
        assert bot.pop_unread("C1") == []

    def test_summary_and_totals(self) -> None:
        """Test unread summary helpers."""
        bot = BotContext()
        bot.push_unread("C1", create_event(message_id="M1"), limit=20)
        bot.push_unread("C1", create_event(message_id="M2"), limit=20)
        bot.push_unread("C2", create_event(channel_id="C2"), limit=20)
        bot.unread_events["C3"] = []

        assert bot.unread_summary() == {"C1": 2, "C2": 1, "C3": 0}
        assert bot.total_unread() == 3
        assert bot.channels_with_unread() == ["C1", "C2"]


class TestBotContextTouchChannel:
    """touch_channel tests."""

    def test_keeps_recent_unique_channels(self) -> None:
        """Test that recently touched channels are bounded and unique."""
        bot = BotContext()
        for channel_id in ["C1", "C2", "C1", "C3", "C4"]:
            bot.touch_channel(channel_id, limit=3)

        assert bot.last_interacted_channel_ids == ["C2", "C3", "C4"]


class TestBotContextDebugSummary:
    """debug_summary tests."""

    def test_includes_chat_details(self) -> None:
        """Test that chat details are truncated and included."""
        bot = BotContext()
        bot.push_unread("C1", create_event(), limit=20)
        chat = ChatContext(
            channel_id="C1",
            messages=[{"role": "user", "content": "x" * 80}],
            actions=create_actions(1),
        )

        summary = bot.debug_summary(chat)

        assert summary["total_unread_count"] == 1
        assert summary["channel_id"] == "C1"
        assert summary["last_messages"][0]["content"] == "x" * 50
        assert summary["last_actions"][0]["action"] == "continue"

    def test_without_chat(self) -> None:
        """Test summary without chat context."""
        summary = BotContext().debug_summary()

        assert summary == {
            "event_queue_length": 0,
            "unread_events": {},
            "total_unread_count": 0,
        }
