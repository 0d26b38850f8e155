"""LLM result entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LLMMetrics:
    """LLM invocation metrics.

    Attributes:
        input_tokens: Number of prompt tokens.
        output_tokens: Number of completion tokens.
        total_tokens: Total number of tokens.
    """

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_usage(cls, usage) -> "LLMMetrics":
        """Create LLMMetrics from an OpenAI-style usage object.

        Args:
            usage: ``response.usage`` from LiteLLM (may be None).

        Returns:
            LLMMetrics instance (zeros if usage is missing).
        """
        if usage is None:
            return cls()
        return cls(
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )


@dataclass(frozen=True)
class GenerationResult:
    """Text generation result.

    Attributes:
        text: The generated text.
        metrics: LLM invocation metrics (optional).
    """

    text: str
    metrics: LLMMetrics | None = None
