"""Sequential decoder for the TGPH binary container format.

Wire layout (little-endian throughout)::

    u32 magic = 0x48504754 ("TGPH")
    u8  version = 1
    u16 container_count
    container_count x:
        string name          u8 length, or 0xFF followed by a u16 length
        u8     element_type  1 = u32, 2 = f32, 3 = string
        u32    element_count
        element_count elements of element_type, no padding

The decoder is stateful only in its byte cursor. Any malformed input raises
FormatError and no partial result is returned.
"""

from __future__ import annotations

import logging
import struct

from tgph.errors import FormatError
from tgph.format.container import Container, ElementType

logger = logging.getLogger(__name__)

MAGIC = 0x48504754
VERSION = 1
LENGTH_ESCAPE = 0xFF

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_HEADER = struct.Struct("<IBH")


class ByteCursor:
    """Bounds-checked little-endian reader over a byte buffer."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._view = memoryview(data).cast("B")
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._view) - self.offset

    def _require(self, size: int, what: str) -> None:
        if size > self.remaining:
            raise FormatError(
                f"unexpected end of buffer reading {what} at offset {self.offset}: "
                f"need {size} bytes, {self.remaining} left"
            )

    def _unpack(self, fmt: struct.Struct, what: str) -> tuple:
        self._require(fmt.size, what)
        values = fmt.unpack_from(self._view, self.offset)
        self.offset += fmt.size
        return values

    def read_u8(self) -> int:
        return self._unpack(_U8, "u8")[0]

    def read_u16(self) -> int:
        return self._unpack(_U16, "u16")[0]

    def read_u32(self) -> int:
        return self._unpack(_U32, "u32")[0]

    def read_bytes(self, size: int) -> bytes:
        self._require(size, f"{size} raw bytes")
        chunk = bytes(self._view[self.offset : self.offset + size])
        self.offset += size
        return chunk

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string, honoring the 0xFF escape."""
        start = self.offset
        length = self.read_u8()
        if length == LENGTH_ESCAPE:
            length = self.read_u16()
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatError(f"invalid UTF-8 in string at offset {start}") from e

    def read_array(self, code: str, count: int) -> tuple:
        """Read ``count`` fixed-width values of struct type ``code``."""
        self._require(count * struct.calcsize(f"<{code}"), f"{count} x {code}")
        return self._unpack(struct.Struct(f"<{count}{code}"), f"{count} x {code}")


def _read_elements(cursor: ByteCursor, element_type: int, count: int, name: str) -> Container:
    if element_type == ElementType.UINT32:
        return Container(name, ElementType.UINT32, cursor.read_array("I", count))
    if element_type == ElementType.FLOAT32:
        return Container(name, ElementType.FLOAT32, cursor.read_array("f", count))
    if element_type == ElementType.STRING:
        return Container(name, ElementType.STRING, tuple(cursor.read_string() for _ in range(count)))
    raise FormatError(f"unrecognized element type {element_type} in container {name!r}")


def read_header(cursor: ByteCursor) -> int:
    """Validate the stream header and return the container count."""
    if cursor.remaining < _HEADER.size:
        raise FormatError(
            f"unexpected end of buffer reading header: need {_HEADER.size} bytes, "
            f"{cursor.remaining} left"
        )
    magic = cursor.read_u32()
    if magic != MAGIC:
        raise FormatError(f"bad magic: expected {MAGIC:#010x}, got {magic:#010x}")
    version = cursor.read_u8()
    if version != VERSION:
        raise FormatError(f"unsupported version: {version}")
    return cursor.read_u16()


def read_container(cursor: ByteCursor) -> Container:
    """Read one container at the cursor."""
    name = cursor.read_string()
    element_type = cursor.read_u8()
    count = cursor.read_u32()
    return _read_elements(cursor, element_type, count, name)


def decode(data: bytes | bytearray | memoryview, *, strict: bool = False) -> list[Container]:
    """Decode a raw (already decompressed) TGPH buffer.

    Args:
        data: The complete byte buffer.
        strict: If True, bytes left over after the last container are an
            error. Otherwise they are ignored with a warning.

    Returns:
        Containers in stream order.

    Raises:
        FormatError: On any malformed input.
    """
    cursor = ByteCursor(data)
    count = read_header(cursor)
    containers = [read_container(cursor) for _ in range(count)]

    if cursor.remaining:
        if strict:
            raise FormatError(f"{cursor.remaining} trailing bytes after {count} containers")
        logger.warning("Ignoring %d trailing bytes after %d containers", cursor.remaining, count)

    logger.debug("Decoded %d containers from %d bytes", len(containers), cursor.offset)
    return containers
