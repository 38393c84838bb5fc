"""Encoder for the TGPH binary container format (inverse of the decoder)."""

from __future__ import annotations

import io
import struct
from collections.abc import Iterable
from typing import BinaryIO

from tgph.errors import EncodeError
from tgph.format.container import Container, ElementType
from tgph.format.decoder import LENGTH_ESCAPE, MAGIC, VERSION

MAX_STRING_LENGTH = 0xFFFF
MAX_CONTAINERS = 0xFFFF


def encode_string(value: str) -> bytes:
    """Length-prefix a string; 255 bytes or longer uses the 0xFF + u16 escape."""
    raw = value.encode("utf-8")
    if len(raw) > MAX_STRING_LENGTH:
        raise EncodeError(f"string of {len(raw)} bytes exceeds {MAX_STRING_LENGTH}")
    if len(raw) >= LENGTH_ESCAPE:
        return struct.pack("<BH", LENGTH_ESCAPE, len(raw)) + raw
    return struct.pack("<B", len(raw)) + raw


def _encode_elements(container: Container) -> bytes:
    count = len(container.elements)
    if container.element_type is ElementType.UINT32:
        return struct.pack(f"<{count}I", *container.elements)
    if container.element_type is ElementType.FLOAT32:
        try:
            return struct.pack(f"<{count}f", *container.elements)
        except OverflowError as e:
            raise EncodeError(f"container {container.name!r}: value out of f32 range") from e
    return b"".join(encode_string(s) for s in container.elements)


def encode_container(container: Container) -> bytes:
    return b"".join(
        (
            encode_string(container.name),
            struct.pack("<BI", int(container.element_type), len(container.elements)),
            _encode_elements(container),
        )
    )


def encode_into(stream: BinaryIO, containers: Iterable[Container]) -> int:
    """Write a full TGPH stream to ``stream``.

    Returns:
        Number of bytes written.
    """
    containers = list(containers)
    if len(containers) > MAX_CONTAINERS:
        raise EncodeError(f"{len(containers)} containers exceeds {MAX_CONTAINERS}")

    written = stream.write(struct.pack("<IBH", MAGIC, VERSION, len(containers)))
    for container in containers:
        written += stream.write(encode_container(container))
    return written


def encode(containers: Iterable[Container]) -> bytes:
    """Encode containers to a TGPH byte string."""
    buffer = io.BytesIO()
    encode_into(buffer, containers)
    return buffer.getvalue()
