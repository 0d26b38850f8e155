"""SQLite implementation of ChannelRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from loopbot.domain.entities import Channel
from loopbot.infrastructure.persistence.exceptions import DatabaseError
from loopbot.infrastructure.persistence.models import ChannelModel


class SQLiteChannelRepository:
    """SQLite 版 ChannelRepository 実装

    チャンネル情報（名前・プラットフォーム・ボット自身の ID）を保存する。
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

    async def save(self, channel: Channel) -> None:
        """チャンネル情報を保存する（upsert）

        既存のチャンネルが存在する場合は更新する。
        空の platform / self_id で既存の値を上書きしない。

        Args:
            channel: 保存するチャンネル

        Raises:
            DatabaseError: データベース操作に失敗
        """
        try:
            async with self._session_factory() as session:
                result = await session.exec(
                    select(ChannelModel).where(ChannelModel.channel_id == channel.id)
                )
                existing = result.first()

                if existing:
                    existing.name = channel.name
                    existing.platform = channel.platform or existing.platform
                    existing.self_id = channel.self_id or existing.self_id
                    existing.updated_at = datetime.now(timezone.utc)
                    session.add(existing)
                else:
                    session.add(self._to_model(channel))

                await session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save channel {channel.id}: {e}") from e

    async def find_all(self) -> list[Channel]:
        """全チャンネルを取得する

        Returns:
            チャンネルリスト
        """
        try:
            async with self._session_factory() as session:
                result = await session.exec(select(ChannelModel))
                return [self._to_entity(m) for m in result.all()]
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to list channels: {e}") from e

    async def find_by_id(self, channel_id: str) -> Channel | None:
        """ID でチャンネルを検索する

        Args:
            channel_id: チャンネル ID

        Returns:
            チャンネル（存在しない場合は None）
        """
        try:
            async with self._session_factory() as session:
                result = await session.exec(
                    select(ChannelModel).where(ChannelModel.channel_id == channel_id)
                )
                model = result.first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to find channel {channel_id}: {e}") from e
        if model is None:
            return None
        return self._to_entity(model)

    def _to_entity(self, model: ChannelModel) -> Channel:
        return Channel(
            id=model.channel_id,
            name=model.name,
            platform=model.platform,
            self_id=model.self_id,
        )

    def _to_model(self, entity: Channel) -> ChannelModel:
        return ChannelModel(
            channel_id=entity.id,
            name=entity.name,
            platform=entity.platform,
            self_id=entity.self_id,
        )
