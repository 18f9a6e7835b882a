"""Shared source utilities: tell URLs from local files and build page URLs."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse


def is_url(source: str) -> bool:
    """True for absolute http(s) URLs."""
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def resolve_source(source: str) -> tuple[str, bool]:
    """Return ``(page_url, is_remote)`` for a URL or an existing local file.

    Raises ValueError when the source is neither.
    """
    if is_url(source):
        return source, True
    path = Path(source)
    if source and path.exists():
        return path.resolve().as_uri(), False
    raise ValueError(f"Invalid source: {source}. Must be a valid URL or file path.")
