"""Common fixtures."""

from collections.abc import Callable

import pytest

from loopbot.domain.entities import BotContext, IncomingEvent
from tests.factories import create_event


@pytest.fixture
def make_event() -> Callable[..., IncomingEvent]:
    """Factory for message-created events."""
    return create_event


@pytest.fixture
def bot() -> BotContext:
    """Create an empty BotContext."""
    return BotContext()
