"""Business logic service for content shortening."""

import logging
from typing import Optional, Dict, Union

from .addresser import ContentAddresser
from .errors import ShortenError, ShortenErrorReason
from .store.base import KeyValueStore
from .store.prefixed import PrefixedKeyValueStore
from .common.logging_config import get_logger


DEFAULT_KEY_PREFIX = "shorten/"
DEFAULT_MAX_PAYLOAD_BYTES = 128 * 1024


class ShortenService:
    """Store payloads under identifiers derived from their content.

    Entries are immutable once written: shortening the same payload again
    finds the existing identifier and performs no write. There is no lock
    around the existence check and the write, so two concurrent calls for
    the same new payload may both write; both write identical bytes under
    the same key.

    Distinct payloads that share a truncated digest are treated as the
    same content. The first one stored wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        addresser: Optional[ContentAddresser] = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize shortening service.

        Args:
            store: Backing store (shared; keys are scoped under key_prefix)
            addresser: Optional content addresser
            key_prefix: Namespace prefix for every entry
            max_payload_bytes: Largest accepted payload
            logger: Optional logger
        """
        self.store = PrefixedKeyValueStore(store, key_prefix)
        self.addresser = addresser or ContentAddresser()
        self.max_payload_bytes = max_payload_bytes
        self.logger = logger or get_logger("service")

    async def shorten(self, payload: Union[str, bytes]) -> str:
        """Store a payload and return its identifier.

        Args:
            payload: Text (stored as UTF-8) or raw bytes

        Returns:
            The payload's identifier

        Raises:
            ShortenError: TooLarge if the payload exceeds the size limit,
                Unknown for any other failure
        """
        try:
            data = self._as_bytes(payload)

            if len(data) > self.max_payload_bytes:
                self.logger.warning(
                    f"Rejected payload of {len(data)} bytes (max {self.max_payload_bytes})"
                )
                raise ShortenError(
                    ShortenErrorReason.TOO_LARGE,
                    "shorten",
                    f"{len(data)} bytes exceeds {self.max_payload_bytes}",
                )

            identifier = self.addresser.compute_id(data)

            if await self.store.has(identifier):
                self.logger.debug(f"Payload already stored: {identifier}")
                return identifier

            await self.store.set(identifier, data)

        except ShortenError:
            raise
        except Exception as e:
            self.logger.error(f"Error shortening payload: {e}")
            raise ShortenError(ShortenErrorReason.UNKNOWN, "shorten", str(e)) from e

        self.logger.info(f"Stored payload: {identifier} ({len(data)} bytes)")
        return identifier

    async def retrieve_bytes(self, identifier: str) -> bytes:
        """Get the raw payload stored under an identifier.

        Args:
            identifier: Identifier returned by shorten()

        Returns:
            Payload bytes

        Raises:
            ShortenError: Unknown if not found or the store read fails
        """
        try:
            data = await self.store.get(identifier)
        except Exception as e:
            self.logger.error(f"Error retrieving {identifier!r}: {e}")
            raise ShortenError(ShortenErrorReason.UNKNOWN, "retrieve", str(e)) from e

        if data is None:
            self.logger.warning(f"Identifier not found: {identifier!r}")
            raise ShortenError(ShortenErrorReason.UNKNOWN, "retrieve", "not found")

        return data

    async def retrieve(self, identifier: str) -> str:
        """Get the payload stored under an identifier as text.

        Args:
            identifier: Identifier returned by shorten()

        Returns:
            Payload decoded as UTF-8

        Raises:
            ShortenError: Unknown if not found, unreadable, or not UTF-8
        """
        data = await self.retrieve_bytes(identifier)

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ShortenError(ShortenErrorReason.UNKNOWN, "retrieve", "payload is not text") from e

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        store_healthy = await self.store.health_check()

        return {
            "store": store_healthy,
            "overall": store_healthy,
        }

    async def close(self) -> None:
        """Close backing store connections."""
        await self.store.close()

    @staticmethod
    def _as_bytes(payload: Union[str, bytes]) -> bytes:
        if isinstance(payload, str):
            return payload.encode("utf-8")
        if isinstance(payload, (bytes, bytearray, memoryview)):
            return bytes(payload)
        raise TypeError(f"Payload must be str or bytes, not {type(payload).__name__}")
