"""Share link utilities for the content shortener."""

from urllib.parse import urlparse


def build_share_url(
    identifier: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete share link.

    Args:
        identifier: The payload identifier
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete share link
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{identifier}"
    return f"{base}/{identifier}"


def extract_identifier(value: str) -> str:
    """Get the identifier from a share link, or return a bare identifier unchanged.

    Args:
        value: Identifier or share link (last path segment is the identifier)

    Returns:
        Identifier
    """
    value = value.strip()
    parsed = urlparse(value)

    if parsed.scheme and parsed.netloc:
        segments = [s for s in parsed.path.split("/") if s]
        return segments[-1] if segments else ""

    return value
