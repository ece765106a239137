"""Namespace prefixing adapter."""

from typing import Optional

from .base import KeyValueStore


class PrefixedKeyValueStore(KeyValueStore):
    """Scope every key of an underlying store under a fixed prefix.

    Lets the service share a physical store with unrelated data: keys
    written without the prefix are never read or overwritten through
    this adapter.
    """

    def __init__(self, store: KeyValueStore, prefix: str):
        """Initialize prefixed store.

        Args:
            store: Underlying store
            prefix: String concatenated ahead of every key (e.g. "shorten/")
        """
        self.store = store
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return self.prefix + key

    async def has(self, key: str) -> bool:
        return await self.store.has(self._key(key))

    async def get(self, key: str) -> Optional[bytes]:
        return await self.store.get(self._key(key))

    async def set(self, key: str, value: bytes) -> None:
        await self.store.set(self._key(key), value)

    async def health_check(self) -> bool:
        return await self.store.health_check()

    async def close(self) -> None:
        await self.store.close()
