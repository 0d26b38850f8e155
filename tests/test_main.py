"""Tests for the entry point helpers."""

import logging
from collections.abc import Generator

import pytest

from loopbot.__main__ import configure_logging
from loopbot.config import LoggingConfig


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    root = logging.getLogger()
    root_level = root.level
    named = logging.getLogger("loopbot.infrastructure.llm")
    named_level = named.level
    formatters = [handler.formatter for handler in root.handlers]
    yield
    root.setLevel(root_level)
    named.setLevel(named_level)
    for handler, formatter in zip(root.handlers, formatters):
        handler.setFormatter(formatter)


class TestConfigureLogging:
    """configure_logging tests."""

    def test_none_keeps_defaults(self, restore_logging: None) -> None:
        level = logging.getLogger().level

        configure_logging(None)

        assert logging.getLogger().level == level

    def test_levels(self, restore_logging: None) -> None:
        configure_logging(
            LoggingConfig(
                level="debug",
                loggers={"loopbot.infrastructure.llm": "warning"},
            )
        )

        assert logging.getLogger().level == logging.DEBUG
        assert (
            logging.getLogger("loopbot.infrastructure.llm").level == logging.WARNING
        )
