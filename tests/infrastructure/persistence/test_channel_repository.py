"""Tests for SQLiteChannelRepository."""

from contextlib import asynccontextmanager
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from loopbot.domain.entities import Channel
from loopbot.infrastructure.persistence import DatabaseError, SQLiteChannelRepository


@pytest.fixture
def repository(session_factory) -> SQLiteChannelRepository:
    """Create test repository."""
    return SQLiteChannelRepository(session_factory)


def create_test_channel(
    id: str = "C123456",
    name: str = "general",
    platform: str = "discord",
    self_id: str = "BOT",
) -> Channel:
    """Create a test Channel entity."""
    return Channel(id=id, name=name, platform=platform, self_id=self_id)


class TestSave:
    """save method tests."""

    async def test_save_new_channel(self, repository: SQLiteChannelRepository) -> None:
        """Test saving a new channel."""
        channel = create_test_channel()

        await repository.save(channel)

        assert await repository.find_by_id(channel.id) == channel

    async def test_save_updates_existing_channel(
        self, repository: SQLiteChannelRepository
    ) -> None:
        """Test that save updates existing channel with same ID."""
        await repository.save(create_test_channel(name="original-name"))

        await repository.save(create_test_channel(name="updated-name"))

        found = await repository.find_by_id("C123456")
        assert found is not None
        assert found.name == "updated-name"
        assert len(await repository.find_all()) == 1

    async def test_save_keeps_platform_info_when_empty(
        self, repository: SQLiteChannelRepository
    ) -> None:
        """Test that empty platform/self_id do not overwrite known values."""
        await repository.save(create_test_channel())

        await repository.save(create_test_channel(platform="", self_id=""))

        found = await repository.find_by_id("C123456")
        assert found is not None
        assert found.platform == "discord"
        assert found.self_id == "BOT"

    async def test_save_wraps_database_errors(self) -> None:
        """Test that SQLAlchemy errors become DatabaseError."""

        @asynccontextmanager
        async def broken_session():
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))
            yield MagicMock()

        repository = SQLiteChannelRepository(broken_session)

        with pytest.raises(DatabaseError):
            await repository.save(create_test_channel())


class TestFind:
    """find_all / find_by_id tests."""

    async def test_find_all(self, repository: SQLiteChannelRepository) -> None:
        await repository.save(create_test_channel(id="C1", name="one"))
        await repository.save(create_test_channel(id="C2", name="two"))

        channels = await repository.find_all()

        assert {c.id for c in channels} == {"C1", "C2"}

    async def test_find_all_empty(self, repository: SQLiteChannelRepository) -> None:
        assert await repository.find_all() == []

    async def test_find_by_id_not_found(
        self, repository: SQLiteChannelRepository
    ) -> None:
        assert await repository.find_by_id("missing") is None
