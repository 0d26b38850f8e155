"""LLM client wrapper."""

import logging
from typing import Any

import litellm
from litellm.exceptions import AuthenticationError, RateLimitError

from loopbot.config import LLMConfig
from loopbot.domain.entities import GenerationResult, LLMMetrics
from loopbot.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
)

logger = logging.getLogger(__name__)


class LLMClient:
    """LiteLLM wrapper client.

    This class provides a simplified interface to LiteLLM,
    applying configuration and handling errors.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize the client.

        Args:
            config: LLM configuration (model, credentials, sampling params).
        """
        self._config = config

    async def complete(
        self,
        messages: list[dict[str, str]],
        **kwargs: Any,
    ) -> GenerationResult:
        """Execute chat completion.

        Args:
            messages: OpenAI-format message list.
                [{"role": "system", "content": "..."}, ...]
            **kwargs: Additional parameters (override config).

        Returns:
            Generated text and token usage.

        Raises:
            LLMAuthenticationError: Invalid API key.
            LLMRateLimitError: Rate limit exceeded.
            LLMError: Other API errors.
        """
        params: dict[str, Any] = {
            "model": self._config.model,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "messages": messages,
        }
        if self._config.api_key:
            params["api_key"] = self._config.api_key
        if self._config.base_url:
            params["api_base"] = self._config.base_url
        if self._config.disable_think:
            # Ollama の thinking モードを無効化
            params["extra_body"] = {"think": False}
        params.update(kwargs)

        logger.debug("LLM request: model=%s", params["model"])

        try:
            response = await litellm.acompletion(**params)
        except AuthenticationError as e:
            logger.error("LLM authentication error: %s", e)
            raise LLMAuthenticationError(str(e)) from e
        except RateLimitError as e:
            logger.warning("LLM rate limit exceeded: %s", e)
            raise LLMRateLimitError(str(e)) from e
        except Exception as e:
            logger.error("LLM error: %s", e)
            raise LLMError(str(e)) from e

        content = response.choices[0].message.content or ""
        metrics = LLMMetrics.from_usage(getattr(response, "usage", None))
        logger.debug("LLM response received")
        return GenerationResult(text=content, metrics=metrics)
