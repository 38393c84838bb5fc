"""Byte sources that hand raw TGPH buffers to the decoder.

Snapshots are usually stored and served gzip-compressed (``data.tgph.gz``).
Sources detect gzip by its magic bytes and return the decompressed stream.
Any failure here is fatal for the page: nothing is retried.
"""

from __future__ import annotations

import gzip
import logging
import zlib
from pathlib import Path

import requests

from tgph.errors import FormatError, SourceError
from tgph.store import ContainerStore

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
DEFAULT_TIMEOUT_S = 30.0


def maybe_decompress(data: bytes) -> bytes:
    """Gunzip ``data`` if it starts with the gzip magic, else return it as is.

    Raises:
        FormatError: The gzip stream is corrupt or truncated.
    """
    if not data.startswith(GZIP_MAGIC):
        return data
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise FormatError(f"corrupt gzip stream: {e}") from e


def read_snapshot(path: str | Path) -> bytes:
    """Read a (possibly gzipped) snapshot file."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceError(f"cannot read snapshot {path}: {e}") from e
    logger.debug("Read %d bytes from %s", len(data), path)
    return maybe_decompress(data)


def fetch_snapshot(
    url: str,
    *,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> bytes:
    """Download a (possibly gzipped) snapshot over HTTP."""
    getter = session or requests
    try:
        response = getter.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise SourceError(f"fetching snapshot {url} failed: {e}") from e
    logger.debug("Fetched %d bytes from %s", len(response.content), url)
    return maybe_decompress(response.content)


def load_store(source: str | Path, *, strict: bool = False) -> ContainerStore:
    """Load and decode a snapshot from a file path or an http(s) URL."""
    text = str(source)
    if text.startswith(("http://", "https://")):
        data = fetch_snapshot(text)
    else:
        data = read_snapshot(source)
    store = ContainerStore.from_bytes(data, strict=strict)
    logger.info("Loaded %d containers from %s", len(store), text)
    return store
