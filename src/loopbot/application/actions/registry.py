"""Action handler protocol and registry."""

import logging
from typing import Protocol

from loopbot.domain.entities import (
    Action,
    ActionResult,
    BotContext,
    CancellationToken,
    ChatContext,
)

logger = logging.getLogger(__name__)


class ActionHandler(Protocol):
    """Executes one named action.

    Attributes:
        name: Action name matched against the payload's ``action`` field.
        description: Short description for logs and error messages.
    """

    name: str
    description: str

    async def execute(
        self,
        bot: BotContext,
        chat: ChatContext,
        action: Action,
        token: CancellationToken,
    ) -> ActionResult:
        """Execute the action.

        Args:
            bot: Process-wide context.
            chat: Context of the channel running the cycle.
            action: Validated action variant matching ``name``.
            token: Cancellation token of the cycle.

        Returns:
            Outcome of the action.
        """
        ...


class ActionRegistry:
    """Name to handler mapping.

    Populated once at startup, then frozen.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._handlers: dict[str, ActionHandler] = {}
        self._frozen = False

    def register(self, handler: ActionHandler) -> None:
        """Register a handler under its name.

        Args:
            handler: The handler to register.

        Raises:
            RuntimeError: If the registry is frozen.
            ValueError: If a handler with the same name is registered.
        """
        if self._frozen:
            raise RuntimeError("ActionRegistry is frozen")
        if handler.name in self._handlers:
            raise ValueError(f"Action handler already registered: {handler.name}")
        self._handlers[handler.name] = handler
        logger.debug("Registered action handler: %s", handler.name)

    def freeze(self) -> None:
        """Disallow further registration."""
        self._frozen = True

    def get(self, name: str) -> ActionHandler | None:
        return self._handlers.get(name)

    def names(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
