"""Unit tests for the Redis storage adapter."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from credibility_analyzer.adapters.outbound.storage_redis import KEY_PREFIX, RedisStorage
from credibility_analyzer.domain.services.history import AnalysisHistory
from credibility_analyzer.ports.storage import StorageError


@pytest.fixture
def mock_settings():
    """Mock Redis settings."""
    settings = MagicMock()
    settings.host = "localhost"
    settings.port = 6379
    settings.db = 0
    settings.password = None
    settings.socket_path = None
    settings.max_connections = 10
    return settings


@pytest.fixture
def mock_redis_client():
    """Mock Redis client with async methods."""
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def redis_storage(mock_settings, mock_redis_client):
    """Redis storage with mocked client."""
    storage = RedisStorage(mock_settings)
    storage._client = mock_redis_client
    return storage


class TestRedisStorage:
    """Test RedisStorage."""

    @pytest.mark.asyncio
    async def test_read_existing_key(self, redis_storage: RedisStorage):
        redis_storage._client.get.return_value = b'["stored"]'

        value = await redis_storage.read("slot")

        assert value == '["stored"]'
        redis_storage._client.get.assert_awaited_once_with(f"{KEY_PREFIX}slot")

    @pytest.mark.asyncio
    async def test_read_missing_key(self, redis_storage: RedisStorage):
        assert await redis_storage.read("slot") is None

    @pytest.mark.asyncio
    async def test_write_encodes_value(self, redis_storage: RedisStorage):
        await redis_storage.write("slot", "[]")

        redis_storage._client.set.assert_awaited_once_with(f"{KEY_PREFIX}slot", b"[]")

    @pytest.mark.asyncio
    async def test_delete(self, redis_storage: RedisStorage):
        assert await redis_storage.delete("slot") is True

    @pytest.mark.asyncio
    async def test_health_check_success(self, redis_storage: RedisStorage):
        assert await redis_storage.health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_no_client(self, mock_settings):
        storage = RedisStorage(mock_settings)

        assert await storage.health_check() is False

    @pytest.mark.asyncio
    async def test_disconnect_closes_client(self, redis_storage: RedisStorage, mock_redis_client):
        await redis_storage.disconnect()

        mock_redis_client.aclose.assert_awaited_once()
        assert redis_storage._client is None


class TestRedisStorageErrorHandling:
    """Test error handling scenarios."""

    @pytest.mark.asyncio
    async def test_read_error_raises_storage_error(self, redis_storage: RedisStorage):
        redis_storage._client.get.side_effect = redis.ConnectionError("Connection failed")

        with pytest.raises(StorageError):
            await redis_storage.read("slot")

    @pytest.mark.asyncio
    async def test_not_connected(self, mock_settings):
        storage = RedisStorage(mock_settings)

        with pytest.raises(StorageError):
            await storage.write("slot", "[]")

    @pytest.mark.asyncio
    async def test_history_over_failing_redis_is_empty(self, redis_storage: RedisStorage):
        redis_storage._client.get.side_effect = redis.ConnectionError("Connection failed")

        assert await AnalysisHistory(redis_storage).list() == []

    @pytest.mark.asyncio
    async def test_invalid_utf8_raises_storage_error(self, redis_storage: RedisStorage):
        redis_storage._client.get.return_value = b"\xff\xfe"

        with pytest.raises(StorageError):
            await redis_storage.read("slot")
