"""Common fixtures for LLM infrastructure tests."""

import pytest

from loopbot.config import LLMConfig, PersonaConfig


@pytest.fixture
def llm_config() -> LLMConfig:
    """Create test LLM config."""
    return LLMConfig(
        model="openai/gpt-4o-mini",
        api_key="sk-test",
        base_url="http://localhost:11434/v1",
        temperature=0.7,
        max_tokens=1000,
    )


@pytest.fixture
def persona_config() -> PersonaConfig:
    """Create test persona config."""
    return PersonaConfig(
        name="loopy",
        personality="You are a curious and friendly bot.",
    )
