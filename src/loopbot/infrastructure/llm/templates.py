"""Jinja2 template utilities for LLM components."""

from datetime import datetime

from jinja2 import Environment, PackageLoader, select_autoescape


def format_timestamp(timestamp: datetime) -> str:
    """Format datetime to readable string.

    Args:
        timestamp: datetime object.

    Returns:
        Formatted string in YYYY-MM-DD HH:MM:SS format (with zone name if aware).
    """
    if timestamp.tzinfo is not None:
        return timestamp.strftime("%Y-%m-%d %H:%M:%S %Z")
    return timestamp.strftime("%Y-%m-%d %H:%M:%S")


def create_jinja_env() -> Environment:
    """Create Jinja2 environment for LLM templates.

    Creates a configured Jinja2 environment that loads templates from
    the loopbot.infrastructure.llm templates directory.

    Returns:
        Configured Jinja2 environment.
    """
    env = Environment(
        loader=PackageLoader("loopbot.infrastructure.llm", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    env.filters["timestamp"] = format_timestamp
    return env
