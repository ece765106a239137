"""Core business logic for the content shortener."""

from .addresser import ContentAddresser, compute_id
from .errors import ShortenError, ShortenErrorReason
from .service import ShortenService

__all__ = [
    "ContentAddresser",
    "compute_id",
    "ShortenError",
    "ShortenErrorReason",
    "ShortenService",
]
