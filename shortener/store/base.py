"""Abstract base class for key-value backing stores."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Abstract base class for key-value store operations.

    Values are raw bytes. Implementations let I/O errors propagate;
    the service layer decides how callers see them.
    """

    @abstractmethod
    async def has(self, key: str) -> bool:
        """Check if a key exists.

        Args:
            key: The key to check

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[bytes]:
        """Get the value stored under a key.

        Args:
            key: The key to lookup

        Returns:
            The stored bytes if found, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: bytes) -> None:
        """Store a value under a key.

        A single atomic put; an existing value is replaced.

        Args:
            key: The key to write
            value: Bytes to store
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
