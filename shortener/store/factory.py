"""Backing store selection from configuration."""

import logging
from typing import Optional

from .base import KeyValueStore
from .memory import MemoryKeyValueStore
from .redis_store import RedisKeyValueStore
from ..common.logging_config import get_logger


async def create_store(
    backend: str = "auto",
    redis_url: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> KeyValueStore:
    """Create and connect the configured backing store.

    "auto" picks Redis when a URL is configured and falls back to an
    in-memory store otherwise.

    Args:
        backend: "auto", "memory" or "redis"
        redis_url: Redis connection URL
        logger: Optional logger

    Returns:
        Ready-to-use store (unprefixed)

    Raises:
        ValueError: If the backend is unknown or redis has no URL
    """
    logger = logger or get_logger("store")

    if backend == "auto":
        backend = "redis" if redis_url else "memory"

    if backend == "memory":
        logger.info("Using in-memory store (entries are lost on restart)")
        return MemoryKeyValueStore()

    if backend == "redis":
        if not redis_url:
            raise ValueError("REDIS_URL is required for the redis store backend")
        logger.info(f"Connecting to Redis at {redis_url}")
        store = RedisKeyValueStore(redis_url=redis_url, logger=logger)
        await store.connect()
        return store

    raise ValueError(f"Unknown store backend: {backend}")
