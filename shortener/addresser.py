"""Content-derived identifier generation."""

import hashlib
import string
from typing import Union


DEFAULT_IDENTIFIER_LENGTH = 12

# SHA-256 hex digest length
MAX_IDENTIFIER_LENGTH = 64


class ContentAddresser:
    """Derive short identifiers from payload content."""

    HEX_CHARS = string.digits + "abcdef"

    def __init__(self, length: int = DEFAULT_IDENTIFIER_LENGTH):
        """Initialize content addresser.

        Args:
            length: Number of hex characters kept from the digest
        """
        if not 1 <= length <= MAX_IDENTIFIER_LENGTH:
            raise ValueError(
                f"Identifier length must be between 1 and {MAX_IDENTIFIER_LENGTH}"
            )
        self.length = length

    def compute_id(self, payload: Union[bytes, str]) -> str:
        """Compute the identifier for a payload.

        The identifier is the SHA-256 hex digest of the payload bytes,
        truncated to the configured length. Identical bytes always give the
        identical identifier. Text is hashed as UTF-8.

        Args:
            payload: Raw payload bytes (or text)

        Returns:
            Lowercase hex identifier
        """
        if isinstance(payload, str):
            payload = payload.encode("utf-8")

        return hashlib.sha256(payload).hexdigest()[:self.length]

    def is_valid_format(self, identifier: str) -> bool:
        """Check if identifier looks like one this addresser produces.

        Args:
            identifier: Identifier to validate

        Returns:
            True if lowercase hex of the configured length
        """
        if not isinstance(identifier, str) or len(identifier) != self.length:
            return False
        return all(c in self.HEX_CHARS for c in identifier)

    def collision_probability(self, entries: int) -> float:
        """Approximate chance that any two of `entries` distinct payloads share an identifier.

        Birthday bound: n^2 / 2^(bits+1).
        """
        bits = self.length * 4
        return min(1.0, (entries * entries) / float(2 ** (bits + 1)))


def compute_id(payload: Union[bytes, str], length: int = DEFAULT_IDENTIFIER_LENGTH) -> str:
    """Compute the identifier for a payload with a one-off addresser."""
    return ContentAddresser(length).compute_id(payload)
