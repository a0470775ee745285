"""
Redis Storage Adapter
=====================

Adapter for Redis as the durable key-value slot holding analysis history.
"""

from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING

import redis.asyncio as redis

from credibility_analyzer.ports.storage import KeyValueStorage, StorageError

if TYPE_CHECKING:
    from credibility_analyzer.infrastructure.config import RedisSettings

logger = logging.getLogger(__name__)

KEY_PREFIX = "credibility:"


class RedisStorage(KeyValueStorage):
    """
    Redis-backed key-value slot store.

    Keys are namespaced with KEY_PREFIX; values are stored as UTF-8 strings.
    """

    def __init__(self, settings: RedisSettings) -> None:
        """
        Initialize the adapter with configuration.

        Args:
            settings: Redis connection settings.
        """
        self._settings = settings
        self._client: redis.Redis | None = None  # type: ignore[type-arg]

    async def connect(self) -> None:
        """Establish connection to Redis."""
        password = None
        if self._settings.password:
            password = self._settings.password.get_secret_value()

        if self._settings.socket_path:
            pool = redis.ConnectionPool(
                connection_class=redis.UnixDomainSocketConnection,
                path=self._settings.socket_path,
                password=password,
                db=self._settings.db,
                max_connections=self._settings.max_connections,
            )
            target = self._settings.socket_path
        else:
            pool = redis.ConnectionPool(
                host=self._settings.host,
                port=self._settings.port,
                password=password,
                db=self._settings.db,
                max_connections=self._settings.max_connections,
            )
            # Force IPv4 socket family on the connection class
            pool.connection_class = type(
                "IPv4Connection",
                (pool.connection_class,),
                {"socket_type": socket.AF_INET},
            )
            target = f"{self._settings.host}:{self._settings.port}"

        self._client = redis.Redis(connection_pool=pool, decode_responses=False)
        try:
            await self._client.ping()  # type: ignore[misc]
        except (redis.ConnectionError, FileNotFoundError) as e:
            logger.error(f"Redis connection to {target} failed: {e}")
            raise StorageError(f"Connection failed: {e}") from e

        logger.info("Connected to Redis at %s", target)

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from Redis")

    async def health_check(self) -> bool:
        """Check if Redis is reachable."""
        if self._client is None:
            return False
        try:
            await self._client.ping()  # type: ignore[misc]
            return True
        except redis.RedisError as e:
            logger.warning(f"Redis health check failed: {e}")
            return False

    def _make_key(self, key: str) -> str:
        """Create full key with prefix."""
        return f"{KEY_PREFIX}{key}"

    async def read(self, key: str) -> str | None:
        if self._client is None:
            raise StorageError("Redis client not connected")
        try:
            data = await self._client.get(self._make_key(key))
        except redis.RedisError as e:
            raise StorageError(f"Redis read failed: {e}") from e

        if data is None:
            return None
        try:
            return data.decode("utf-8") if isinstance(data, bytes) else str(data)
        except UnicodeDecodeError as e:
            raise StorageError(f"Stored value is not valid UTF-8: {e}") from e

    async def write(self, key: str, value: str) -> None:
        if self._client is None:
            raise StorageError("Redis client not connected")
        try:
            await self._client.set(self._make_key(key), value.encode("utf-8"))
        except redis.RedisError as e:
            raise StorageError(f"Redis write failed: {e}") from e

    async def delete(self, key: str) -> bool:
        if self._client is None:
            raise StorageError("Redis client not connected")
        try:
            removed = await self._client.delete(self._make_key(key))
        except redis.RedisError as e:
            raise StorageError(f"Redis delete failed: {e}") from e
        return bool(removed)
