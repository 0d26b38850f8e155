"""SQLite store for recorded channels and messages."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from loopbot.infrastructure.persistence.exceptions import DatabaseError
from loopbot.infrastructure.persistence.models import ChannelModel, MessageModel

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

# loopbot が管理するテーブル
TABLES = [ChannelModel.__table__, MessageModel.__table__]


def database_url(database_path: str) -> str:
    """aiosqlite 用の接続 URL を返す

    ファイルの場合は親ディレクトリを作成する。
    """
    if database_path == MEMORY_DATABASE:
        return f"sqlite+aiosqlite:///{MEMORY_DATABASE}"
    Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{database_path}"


def create_schema(conn: Connection) -> None:
    """channels / messages テーブルを作成する（既存なら何もしない）"""
    SQLModel.metadata.create_all(conn, tables=TABLES)


class DatabaseManager:
    """Owns the engine behind the channel and message repositories.

    The engine is opened lazily on first use. ``get_session`` is the
    session factory handed to ``SQLiteChannelRepository`` and
    ``SQLiteMessageRepository``.
    """

    def __init__(self, database_path: str) -> None:
        """Initialize the manager.

        Args:
            database_path: SQLite file path, or ":memory:".
        """
        self._database_path = database_path
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        """Check if the engine has been created."""
        return self._engine is not None

    def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(database_url(self._database_path))
            self._session_factory = async_sessionmaker(
                self._engine, class_=AsyncSession, expire_on_commit=False
            )
            logger.info("Opened database: %s", self._database_path)
        return self._engine

    async def create_tables(self) -> None:
        """Create the channels and messages tables.

        Raises:
            DatabaseError: If the schema could not be created.
        """
        try:
            async with self.get_engine().begin() as conn:
                await conn.run_sync(create_schema)
        except (OSError, SQLAlchemyError) as e:
            raise DatabaseError(
                f"Failed to initialize database {self._database_path}: {e}"
            ) from e

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        self.get_engine()
        assert self._session_factory is not None
        async with self._session_factory() as session:
            yield session

    async def close(self) -> None:
        """Dispose the engine. Safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Closed database: %s", self._database_path)
