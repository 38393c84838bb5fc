"""TGPH binary container format: value types, decoder, encoder, producer."""

from tgph.format.container import Container, ElementType
from tgph.format.decoder import MAGIC, VERSION, ByteCursor, decode
from tgph.format.encoder import encode, encode_into
from tgph.format.snapshot import DEFAULT_ENTRY_LIMIT, SnapshotBuilder

__all__ = [
    "DEFAULT_ENTRY_LIMIT",
    "MAGIC",
    "VERSION",
    "ByteCursor",
    "Container",
    "ElementType",
    "SnapshotBuilder",
    "decode",
    "encode",
    "encode_into",
]
