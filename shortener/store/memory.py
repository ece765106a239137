"""In-process key-value store for development and tests."""

from typing import Dict, List, Optional

from .base import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store. Contents live for the process lifetime only."""

    def __init__(self):
        self._data: Dict[str, bytes] = {}

    async def has(self, key: str) -> bool:
        return key in self._data

    async def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def keys(self) -> List[str]:
        """Return every stored key, unprefixed store keys included."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)
