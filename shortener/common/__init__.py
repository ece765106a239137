"""Common utilities for the content shortener."""

from .url_builder import build_share_url, extract_identifier
from .logging_config import setup_logging

__all__ = [
    "build_share_url",
    "extract_identifier",
    "setup_logging",
]
