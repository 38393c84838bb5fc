"""Bounded, append-only builder for TGPH snapshots.

A producer appends one value per metric per sampling tick. Each named
container keeps at most ``entry_limit`` values; older values are dropped
first, so the written file is always the most recent window.
"""

from __future__ import annotations

import gzip
import logging
import os
from collections import deque
from pathlib import Path
from typing import Any

from tgph.format.container import Container, ElementType
from tgph.format.encoder import encode

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_LIMIT = 1000


class SnapshotBuilder:
    """Accumulates named series and encodes them as a TGPH stream.

    Args:
        entry_limit: Maximum number of elements retained per container.
    """

    def __init__(self, entry_limit: int = DEFAULT_ENTRY_LIMIT) -> None:
        if entry_limit < 1:
            raise ValueError(f"entry_limit must be >= 1, got {entry_limit}")
        self.entry_limit = entry_limit
        self._types: dict[str, ElementType] = {}
        self._series: dict[str, deque] = {}

    def append(self, name: str, value: Any) -> None:
        """Append ``value`` to the container called ``name``.

        The container is created on first use with the element type inferred
        from ``value``.

        Raises:
            TypeError: If ``value`` does not match the container's type.
        """
        element_type = ElementType.for_value(value)
        existing = self._types.setdefault(name, element_type)
        if existing is not element_type:
            raise TypeError(
                f"container {name!r} holds {existing.name}, cannot append {element_type.name}"
            )
        series = self._series.get(name)
        if series is None:
            series = self._series[name] = deque(maxlen=self.entry_limit)
        series.append(value)

    def names(self) -> list[str]:
        return list(self._series)

    def containers(self) -> list[Container]:
        """Immutable snapshots of every container in creation order."""
        return [
            Container(name, self._types[name], tuple(values))
            for name, values in self._series.items()
        ]

    def to_bytes(self) -> bytes:
        return encode(self.containers())

    def write(self, path: str | Path, compress: bool = True) -> Path:
        """Write the snapshot to ``path``, replacing any previous file atomically.

        Args:
            path: Destination file.
            compress: Gzip the stream (the format browsers fetch as ``.tgph.gz``).
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = self.to_bytes()
        if compress:
            payload = gzip.compress(payload)

        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(payload)
        os.replace(tmp_path, path)
        logger.debug("Wrote %d bytes (%d containers) to %s", len(payload), len(self._series), path)
        return path

    def __len__(self) -> int:
        return len(self._series)
