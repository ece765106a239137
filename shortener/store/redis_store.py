"""Redis implementation of the key-value backing store."""

import logging
from typing import Optional

import redis.asyncio as redis

from .base import KeyValueStore
from ..common.logging_config import get_logger


class RedisKeyValueStore(KeyValueStore):
    """Durable key-value store on Redis.

    Values are kept binary-safe (no response decoding). Connection and
    command errors are not caught here.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            client: Optional pre-built client (takes precedence over redis_url)
            logger: Optional logger instance
        """
        if client is None and not redis_url:
            raise ValueError("Either redis_url or client is required")

        self.redis_url = redis_url
        self.client: Optional[redis.Redis] = client
        self.logger = logger or get_logger("store.redis")

    async def connect(self) -> None:
        """Connect to Redis and verify the connection with a ping."""
        if self.client is None:
            self.client = redis.from_url(self.redis_url, decode_responses=False)

        await self.client.ping()
        self.logger.info("Connected to Redis")

    def _require_client(self) -> redis.Redis:
        if self.client is None:
            raise RuntimeError("Redis store is not connected")
        return self.client

    async def has(self, key: str) -> bool:
        return await self._require_client().exists(key) > 0

    async def get(self, key: str) -> Optional[bytes]:
        value = await self._require_client().get(key)
        if value is None:
            return None
        if isinstance(value, str):
            # client built with decode_responses=True
            return value.encode("utf-8")
        return value

    async def set(self, key: str, value: bytes) -> None:
        await self._require_client().set(key, value)

    async def health_check(self) -> bool:
        """Ping Redis.

        Returns:
            True if Redis answers
        """
        if self.client is None:
            return False

        try:
            await self.client.ping()
            return True
        except Exception as e:
            self.logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
