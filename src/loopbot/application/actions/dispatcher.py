"""Action dispatcher."""

import logging
from typing import Any

from pydantic import ValidationError

from loopbot.application.actions.registry import ActionRegistry
from loopbot.domain.entities import (
    ActionResult,
    BotContext,
    CancellationToken,
    ChatContext,
    parse_action,
)
from loopbot.domain.exceptions import CycleCancelledError

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Resolves an action payload to its handler and executes it.

    The payload is validated into its typed ``Action`` variant before the
    handler sees it, so handlers only ever receive well-formed actions.

    Every failure becomes a recoverable ``ActionResult`` so the planner sees
    it in the next cycle's action history. Only cycle cancellation escapes.
    """

    def __init__(self, bot: BotContext, registry: ActionRegistry) -> None:
        """Initialize the dispatcher.

        Args:
            bot: Process-wide context passed to handlers.
            registry: Registered action handlers.
        """
        self._bot = bot
        self._registry = registry

    async def dispatch(
        self,
        chat: ChatContext,
        payload: Any,
        token: CancellationToken,
    ) -> ActionResult:
        """Execute an action payload.

        Args:
            chat: Context of the channel running the cycle.
            payload: Flat action payload from the planner.
            token: Cancellation token of the cycle.

        Returns:
            Outcome of the action. Never raises for handler failures.

        Raises:
            CycleCancelledError: If the cycle was superseded mid-action.
        """
        name = payload.get("action") if isinstance(payload, dict) else None
        if not isinstance(name, str) or not name:
            logger.warning("Malformed action payload: %r", payload)
            return ActionResult.failure(
                "System Error: Malformed action payload, expected a JSON object "
                f'with an "action" field, got: {payload!r}'
            )

        handler = self._registry.get(name)
        if handler is None:
            logger.warning("Unknown action: %s", name)
            return ActionResult.failure(
                f"System Error: Unknown action '{name}'. "
                f"Available actions: {', '.join(self._registry.names())}"
            )

        try:
            action = parse_action(payload)
        except ValidationError as e:
            logger.warning("Invalid arguments for action %s: %s", name, e)
            return ActionResult.failure(
                f"System Error: Invalid arguments for action '{name}': "
                f"{_summarize_validation_error(e)}"
            )

        logger.info("Dispatching action %s in channel %s", name, chat.channel_id)
        try:
            return await handler.execute(self._bot, chat, action, token)
        except CycleCancelledError:
            raise
        except Exception as e:
            logger.exception("Action %s failed", name)
            return ActionResult.failure(
                f"System Error: Action '{name}' failed: {e}"
            )


def _summarize_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg', 'invalid')}")
    return "; ".join(parts)
