"""アプリケーションのエントリポイント"""

import asyncio
import logging
import signal
import sys
from pathlib import Path

from loopbot.application.actions import ActionDispatcher, create_default_registry
from loopbot.application.services import ChatSessionService, LoopScheduler
from loopbot.config import ConfigError, LoggingConfig, load_config
from loopbot.domain.entities import BotContext
from loopbot.infrastructure.events import EventIngestor, SweepScheduler
from loopbot.infrastructure.llm import (
    LLMActionPlanner,
    LLMClient,
    LLMConfigurationError,
)
from loopbot.infrastructure.persistence import (
    DatabaseError,
    DatabaseManager,
    SQLiteChannelRepository,
    SQLiteMessageRepository,
)
from loopbot.infrastructure.satori import SatoriClient, SatoriMessagingService
from loopbot.presentation.satori_handlers import register_handlers

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


async def main() -> None:
    """アプリケーションを起動する"""
    config_path = Path("config.yaml")
    if not config_path.exists():
        logger.error("config.yaml not found")
        sys.exit(1)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    configure_logging(config.logging)

    # Initialize database
    db_manager = DatabaseManager(config.memory.database_path)
    try:
        await db_manager.create_tables()
    except DatabaseError as e:
        logger.error("%s", e)
        await db_manager.close()
        sys.exit(1)

    message_repository = SQLiteMessageRepository(db_manager.get_session)
    channel_repository = SQLiteChannelRepository(db_manager.get_session)

    messaging_service = SatoriMessagingService(config.satori)

    llm_client = LLMClient(config.llm)
    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)
    try:
        planner = LLMActionPlanner(
            llm_client,
            config.llm,
            config.persona,
            sleep_seconds=config.loop.sleep_duration_seconds,
            debug_llm_messages=debug_llm_messages,
        )
    except LLMConfigurationError as e:
        logger.error("Invalid LLM configuration: %s", e)
        await db_manager.close()
        sys.exit(1)

    registry = create_default_registry(
        messaging_service=messaging_service,
        channel_repository=channel_repository,
        message_repository=message_repository,
        bot_name=config.persona.name,
        sleep_duration_seconds=config.loop.sleep_duration_seconds,
    )
    logger.info("Registered actions: %s", ", ".join(registry.names()))

    bot = BotContext()
    sessions = ChatSessionService(bot, channel_repository)
    dispatcher = ActionDispatcher(bot, registry)
    loop_scheduler = LoopScheduler(
        bot=bot,
        sessions=sessions,
        planner=planner,
        dispatcher=dispatcher,
        config=config.loop,
    )
    ingestor = EventIngestor(
        bot=bot,
        sessions=sessions,
        scheduler=loop_scheduler,
        channel_repository=channel_repository,
        message_repository=message_repository,
        config=config.loop,
    )
    sweep_scheduler = SweepScheduler(
        loop_scheduler, config.loop.periodic_loop_interval_seconds
    )

    satori_client = SatoriClient(config.satori)
    register_handlers(satori_client, ingestor)

    logger.info("Starting %s...", config.persona.name)

    client_task = asyncio.create_task(satori_client.start())
    sweep_task = asyncio.create_task(sweep_scheduler.start())

    # Setup signal handlers for graceful shutdown
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def shutdown_handler() -> None:
        logger.info("Received shutdown signal...")
        stop_event.set()

    loop.add_signal_handler(signal.SIGINT, shutdown_handler)
    loop.add_signal_handler(signal.SIGTERM, shutdown_handler)

    await stop_event.wait()

    logger.info("Shutting down...")

    await sweep_scheduler.stop()
    await satori_client.stop()

    # Cancel in-flight cycles
    for chat in bot.chats.values():
        if chat.current_token is not None:
            chat.current_token.cancel()

    client_task.cancel()
    sweep_task.cancel()
    await asyncio.gather(client_task, sweep_task, return_exceptions=True)

    await messaging_service.close()
    await db_manager.close()

    logger.info("Shutdown complete")


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
