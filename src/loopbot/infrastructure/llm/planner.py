"""LLM-based action planner."""

import logging
from datetime import datetime
from typing import Any

from loopbot.config import LLMConfig, PersonaConfig
from loopbot.domain.entities import ActionRecord, CancellationToken, IncomingEvent
from loopbot.domain.services import (
    TextGenerator,
    format_action_history,
    format_incoming_event,
    format_unread_summary,
)
from loopbot.infrastructure.llm.action_parser import (
    parse_action_response,
    strip_thinking,
)
from loopbot.infrastructure.llm.exceptions import (
    EmptyResponseError,
    LLMConfigurationError,
)
from loopbot.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)


class LLMActionPlanner:
    """Decides the next action of a channel by asking the LLM.

    The prompt is a system turn (agent instructions and persona), the
    channel's conversation history, and a user turn describing the current
    state (incoming event, action history, time, unread counts).
    """

    def __init__(
        self,
        client: TextGenerator,
        llm_config: LLMConfig,
        persona: PersonaConfig,
        *,
        sleep_seconds: float = 30.0,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the planner.

        Args:
            client: Text generator (LLMClient).
            llm_config: LLM configuration, validated here.
            persona: Persona configuration.
            sleep_seconds: Default sleep duration advertised in the prompt.
            debug_llm_messages: If True, log LLM messages at INFO level.

        Raises:
            LLMConfigurationError: If API key, base URL or model is missing.
        """
        self._validate_config(llm_config)
        self._client = client
        self._persona = persona
        self._sleep_seconds = sleep_seconds
        self._debug_llm_messages = debug_llm_messages
        self._jinja_env = create_jinja_env()

    @staticmethod
    def _validate_config(config: LLMConfig) -> None:
        if not config.api_key:
            raise LLMConfigurationError(
                "LLM API key is not configured (llm.api_key)"
            )
        if not config.base_url:
            raise LLMConfigurationError(
                "LLM API base URL is not configured (llm.base_url)"
            )
        if not config.model:
            raise LLMConfigurationError("LLM model is not configured (llm.model)")

    async def decide(
        self,
        messages: list[dict[str, str]],
        actions: list[ActionRecord],
        unread_summary: dict[str, int],
        incoming_event: IncomingEvent | None,
        token: CancellationToken,
    ) -> dict[str, Any]:
        """Decide the next action.

        Args:
            messages: Conversation history of the channel.
            actions: Action history of the channel.
            unread_summary: Unread event count per channel.
            incoming_event: Event that triggered this cycle, if any.
            token: Cancellation token of the cycle.

        Returns:
            Flat action payload.

        Raises:
            CycleCancelledError: If the cycle was superseded.
            EmptyResponseError: If the LLM returned no text.
            ActionParseError: If the response is not an action object.
            LLMError: If the LLM call failed.
        """
        request_messages = self.build_messages(
            messages, actions, unread_summary, incoming_event
        )

        if self._should_log():
            self._log_messages(request_messages)

        result = await token.run(self._client.complete(request_messages))
        text = strip_thinking(result.text)
        if not text:
            raise EmptyResponseError("No response text")

        metrics = result.metrics
        logger.info(
            "Generated action: response=%s, unread=%s, tokens=%s (prompt=%s, completion=%s)",
            text,
            unread_summary,
            metrics.total_tokens if metrics else None,
            metrics.input_tokens if metrics else None,
            metrics.output_tokens if metrics else None,
        )

        return parse_action_response(text)

    def build_messages(
        self,
        messages: list[dict[str, str]],
        actions: list[ActionRecord],
        unread_summary: dict[str, int],
        incoming_event: IncomingEvent | None,
        now: datetime | None = None,
    ) -> list[dict[str, str]]:
        """Assemble the prompt.

        Args:
            messages: Conversation history of the channel.
            actions: Action history of the channel.
            unread_summary: Unread event count per channel.
            incoming_event: Event that triggered this cycle, if any.
            now: Current time (defaults to local server time).

        Returns:
            OpenAI-format message list.
        """
        system_prompt = self._jinja_env.get_template("system_prompt.j2").render(
            persona_name=self._persona.name,
            personality=self._persona.personality,
            response_language=self._persona.response_language,
            sleep_seconds=int(self._sleep_seconds),
        )
        user_prompt = self._jinja_env.get_template("planner_request.j2").render(
            incoming_events=(
                [format_incoming_event(incoming_event)] if incoming_event else []
            ),
            action_history=format_action_history(actions),
            now=now or datetime.now().astimezone(),
            total_unread=sum(unread_summary.values()),
            unread_table=format_unread_summary(unread_summary),
        )
        return [
            {"role": "system", "content": system_prompt},
            *messages,
            {"role": "user", "content": user_prompt},
        ]

    def _should_log(self) -> bool:
        """Check if logging should occur."""
        return self._debug_llm_messages or logger.isEnabledFor(logging.DEBUG)

    def _log_messages(self, messages: list[dict[str, str]]) -> None:
        """Log LLM request messages."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Request Messages ===")
        for i, msg in enumerate(messages):
            log_func("[%d] role=%s", i, msg.get("role", "unknown"))
            log_func("    content: %s", msg.get("content", ""))
        log_func("=== End of Messages ===")
