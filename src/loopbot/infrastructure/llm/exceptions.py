"""LLM-related exceptions."""


class LLMError(Exception):
    """Base exception for LLM-related errors."""


class LLMRateLimitError(LLMError):
    """Rate limit exceeded error."""


class LLMAuthenticationError(LLMError):
    """Authentication error (invalid API key, etc.)."""


class LLMConfigurationError(LLMError):
    """Planner configuration is incomplete (API key, base URL or model)."""


class EmptyResponseError(LLMError):
    """The LLM returned no usable text."""


class ActionParseError(LLMError):
    """The LLM response could not be parsed into an action object."""
