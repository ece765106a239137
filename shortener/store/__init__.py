"""Key-value backing stores for the shortening service."""

from .base import KeyValueStore
from .memory import MemoryKeyValueStore
from .prefixed import PrefixedKeyValueStore
from .redis_store import RedisKeyValueStore
from .factory import create_store

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PrefixedKeyValueStore",
    "RedisKeyValueStore",
    "create_store",
]
