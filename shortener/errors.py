"""Error types raised by the shortening service."""

from enum import Enum
from typing import Optional


class ShortenErrorReason(str, Enum):
    """Why a shorten/retrieve call failed."""

    TOO_LARGE = "TooLarge"
    UNKNOWN = "Unknown"


class ShortenError(Exception):
    """The only error type callers of the service ever see.

    Attributes:
        reason: ShortenErrorReason value
        method: Name of the operation that failed ("shorten" or "retrieve")
        detail: Optional human readable detail, for logs only
    """

    def __init__(
        self,
        reason: ShortenErrorReason,
        method: str,
        detail: Optional[str] = None,
    ):
        self.reason = reason
        self.method = method
        self.detail = detail

        message = f"{method} failed: {reason.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)

    @property
    def too_large(self) -> bool:
        return self.reason == ShortenErrorReason.TOO_LARGE
