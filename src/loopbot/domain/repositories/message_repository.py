"""Message repository protocol."""

from typing import Protocol

from loopbot.domain.entities import Message


class MessageRepository(Protocol):
    """メッセージリポジトリの抽象インターフェース"""

    async def save(self, message: Message) -> None:
        """メッセージを保存する

        Args:
            message: 保存するメッセージ
        """
        ...

    async def find_by_channel(
        self,
        channel_id: str,
        limit: int = 20,
    ) -> list[Message]:
        """チャンネルのメッセージを取得する

        Args:
            channel_id: チャンネル ID
            limit: 取得する最大件数

        Returns:
            メッセージリスト（新しい順）
        """
        ...
