"""
Tests for the asyncpg pool lifecycle in campaign_backend.core.database.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from campaign_backend.core import database


@pytest.fixture
def reset_pool(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start each test without a pool."""
    monkeypatch.setattr(database, '_pool', None)


class TestPoolLifecycle:

    @pytest.mark.asyncio
    async def test_init_db_uses_settings(
        self,
        reset_pool: None,
        mock_settings: Mock,
        mock_db_pool: AsyncMock
    ) -> None:
        create_pool = AsyncMock(return_value=mock_db_pool)

        with patch.object(database, 'get_settings', return_value=mock_settings), \
                patch.object(database.asyncpg, 'create_pool', new=create_pool):
            pool = await database.init_db()

        assert pool is mock_db_pool
        create_pool.assert_awaited_once_with(
            dsn=mock_settings.database_url,
            min_size=2,
            max_size=10,
            command_timeout=60.0,
        )

    @pytest.mark.asyncio
    async def test_get_db_pool_initializes_once(
        self,
        reset_pool: None,
        mock_settings: Mock,
        mock_db_pool: AsyncMock
    ) -> None:
        create_pool = AsyncMock(return_value=mock_db_pool)

        with patch.object(database, 'get_settings', return_value=mock_settings), \
                patch.object(database.asyncpg, 'create_pool', new=create_pool):
            first = await database.get_db_pool()
            second = await database.get_db_pool()

        assert first is second is mock_db_pool
        assert create_pool.await_count == 1

    @pytest.mark.asyncio
    async def test_close_db_resets_pool(
        self,
        monkeypatch: pytest.MonkeyPatch,
        mock_db_pool: AsyncMock
    ) -> None:
        monkeypatch.setattr(database, '_pool', mock_db_pool)

        await database.close_db()

        mock_db_pool.close.assert_awaited_once()
        assert database._pool is None

    @pytest.mark.asyncio
    async def test_close_db_without_pool(self, reset_pool: None) -> None:
        await database.close_db()

        assert database._pool is None
