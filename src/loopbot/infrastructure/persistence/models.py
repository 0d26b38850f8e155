"""SQLModel table definitions."""

from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class MessageModel(SQLModel, table=True):
    """メッセージテーブル"""

    __tablename__ = "messages"

    id: int | None = Field(default=None, primary_key=True)
    channel_id: str = Field(index=True)
    user_id: str
    user_name: str
    content: str
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )


class ChannelModel(SQLModel, table=True):
    """チャンネルテーブル"""

    __tablename__ = "channels"

    id: int | None = Field(default=None, primary_key=True)
    channel_id: str = Field(unique=True, index=True)
    name: str
    platform: str = ""
    self_id: str = ""
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
