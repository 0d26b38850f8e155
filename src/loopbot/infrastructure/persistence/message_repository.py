"""SQLite implementation of MessageRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from loopbot.domain.entities import Message
from loopbot.infrastructure.persistence.exceptions import DatabaseError
from loopbot.infrastructure.persistence.models import MessageModel


class SQLiteMessageRepository:
    """SQLite 版 MessageRepository 実装

    受信・送信したメッセージを追記型で記録する。
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

    async def save(self, message: Message) -> None:
        """メッセージを保存する

        Args:
            message: 保存するメッセージ

        Raises:
            DatabaseError: データベース操作に失敗
        """
        try:
            async with self._session_factory() as session:
                session.add(self._to_model(message))
                await session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to save message in {message.channel_id}: {e}"
            ) from e

    async def find_by_channel(
        self,
        channel_id: str,
        limit: int = 20,
    ) -> list[Message]:
        """チャンネルのメッセージを取得する

        新しい順（created_at DESC）で返す。

        Args:
            channel_id: チャンネル ID
            limit: 取得する最大件数

        Returns:
            メッセージリスト（新しい順）
        """
        try:
            async with self._session_factory() as session:
                statement = (
                    select(MessageModel)
                    .where(MessageModel.channel_id == channel_id)
                    .order_by(
                        MessageModel.created_at.desc(),  # type: ignore[union-attr]
                        MessageModel.id.desc(),  # type: ignore[union-attr]
                    )
                    .limit(limit)
                )
                result = await session.exec(statement)
                return [self._to_entity(m) for m in result.all()]
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to load messages of {channel_id}: {e}"
            ) from e

    def _to_entity(self, model: MessageModel) -> Message:
        # SQLite はタイムゾーンを保存しないため UTC として扱う
        created_at = model.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Message(
            channel_id=model.channel_id,
            user_id=model.user_id,
            user_name=model.user_name,
            content=model.content,
            created_at=created_at,
        )

    def _to_model(self, entity: Message) -> MessageModel:
        return MessageModel(
            channel_id=entity.channel_id,
            user_id=entity.user_id,
            user_name=entity.user_name,
            content=entity.content,
            created_at=entity.created_at,
        )
