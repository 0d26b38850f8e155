"""Tolerant parsing of planner responses into action payloads."""

import json
import logging
import re
from typing import Any

import json_repair

from loopbot.infrastructure.llm.exceptions import ActionParseError

logger = logging.getLogger(__name__)

THINK_PATTERN = re.compile(r"<think>.*?</think>", re.DOTALL)
_LEADING_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*")
_TRAILING_FENCE = re.compile(r"\s*```\s*$")


def strip_thinking(text: str) -> str:
    """Remove <think>...</think> blocks and surrounding whitespace."""
    return THINK_PATTERN.sub("", text).strip()


def strip_code_fence(text: str) -> str:
    """Remove a leading ```/```json fence and a trailing ``` fence."""
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_action_response(text: str) -> dict[str, Any]:
    """Parse a planner response into a flat action payload.

    Strict JSON is tried first; on failure the text goes through
    ``json_repair`` which recovers truncated or partial objects.
    A nested ``parameters`` object is merged into the top level, with
    outer fields taking precedence.

    Args:
        text: Raw response (think markup already removed).

    Returns:
        Flat action payload.

    Raises:
        ActionParseError: If no JSON object can be recovered.
    """
    body = strip_code_fence(text)
    if not body:
        raise ActionParseError("Empty action response")

    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        logger.debug("Strict JSON parse failed, repairing: %s", body)
        parsed = json_repair.loads(body)

    if not isinstance(parsed, dict) or not parsed:
        raise ActionParseError(f"Response is not a JSON object: {body[:200]}")

    parameters = parsed.get("parameters")
    if isinstance(parameters, dict):
        rest = {key: value for key, value in parsed.items() if key != "parameters"}
        return {**parameters, **rest}

    return parsed
