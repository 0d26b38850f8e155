"""LLM integration."""

from loopbot.infrastructure.llm.action_parser import (
    parse_action_response,
    strip_code_fence,
    strip_thinking,
)
from loopbot.infrastructure.llm.client import LLMClient
from loopbot.infrastructure.llm.exceptions import (
    ActionParseError,
    EmptyResponseError,
    LLMAuthenticationError,
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
)
from loopbot.infrastructure.llm.planner import LLMActionPlanner

__all__ = [
    "ActionParseError",
    "EmptyResponseError",
    "LLMActionPlanner",
    "LLMAuthenticationError",
    "LLMClient",
    "LLMConfigurationError",
    "LLMError",
    "LLMRateLimitError",
    "parse_action_response",
    "strip_code_fence",
    "strip_thinking",
]
