"""Tests for the TGPH decoder."""

import math
import struct

import pytest

from tgph.errors import FormatError
from tgph.format import ByteCursor, Container, ElementType, decode, encode

# === Helpers ===


def _string(raw: bytes) -> bytes:
    if len(raw) >= 255:
        return struct.pack("<BH", 0xFF, len(raw)) + raw
    return struct.pack("<B", len(raw)) + raw


def _container(name: str, element_type: int, count: int, payload: bytes) -> bytes:
    return _string(name.encode()) + struct.pack("<BI", element_type, count) + payload


# === Header ===


class TestHeader:
    def test_empty_stream(self, header_bytes):
        assert decode(header_bytes(0)) == []

    def test_literal_empty_stream(self):
        assert decode(bytes([0x54, 0x47, 0x50, 0x48, 0x01, 0x00, 0x00])) == []

    def test_bad_magic(self, header_bytes):
        with pytest.raises(FormatError, match="bad magic"):
            decode(header_bytes(0, magic=0x12345678))

    def test_bad_version(self, header_bytes):
        with pytest.raises(FormatError, match="unsupported version"):
            decode(header_bytes(0, version=2))

    def test_short_header(self):
        with pytest.raises(FormatError, match="unexpected end of buffer"):
            decode(b"TGP")

    def test_empty_buffer(self):
        with pytest.raises(FormatError):
            decode(b"")


# === Element types ===


class TestElements:
    def test_u32_container(self, header_bytes):
        payload = struct.pack("<4I", 12, 34, 56, 1 << 31)
        data = header_bytes(1) + _container("testing", 1, 4, payload)

        [container] = decode(data)

        assert container.name == "testing"
        assert container.element_type is ElementType.UINT32
        assert container.elements == (12, 34, 56, 1 << 31)

    def test_f32_container(self, header_bytes):
        payload = struct.pack("<3f", math.pi, 1.618, 0.3)
        data = header_bytes(1) + _container("floats", 2, 3, payload)

        [container] = decode(data)

        assert container.element_type is ElementType.FLOAT32
        expected = struct.unpack("<3f", payload)
        assert container.elements == expected

    def test_string_container(self, header_bytes):
        payload = _string(b"lorem") + _string(b"foxem") + _string(b"verylongstringemlatinem")
        data = header_bytes(1) + _container("strings", 3, 3, payload)

        [container] = decode(data)

        assert container.element_type is ElementType.STRING
        assert container.elements == ("lorem", "foxem", "verylongstringemlatinem")

    def test_empty_container(self, header_bytes):
        [container] = decode(header_bytes(1) + _container("empty", 1, 0, b""))
        assert len(container) == 0

    def test_multiple_containers_in_order(self, header_bytes):
        data = (
            header_bytes(3)
            + _container("a", 1, 1, struct.pack("<I", 7))
            + _container("b", 2, 1, struct.pack("<f", 0.5))
            + _container("c", 3, 1, _string(b"x"))
        )
        assert [c.name for c in decode(data)] == ["a", "b", "c"]

    def test_utf8_name(self, header_bytes):
        data = header_bytes(1) + _container("Temperatura °C", 2, 0, b"")
        assert decode(data)[0].name == "Temperatura °C"

    @pytest.mark.parametrize("element_type", [0, 4, 255])
    def test_unknown_element_type(self, header_bytes, element_type):
        data = header_bytes(1) + _container("bad", element_type, 0, b"")
        with pytest.raises(FormatError, match="unrecognized element type"):
            decode(data)

    def test_unknown_type_after_valid_container_returns_nothing(self, header_bytes):
        data = (
            header_bytes(2)
            + _container("good", 1, 1, struct.pack("<I", 1))
            + _container("bad", 9, 0, b"")
        )
        with pytest.raises(FormatError):
            decode(data)


# === Length escape ===


class TestLengthEscape:
    def test_name_of_254_bytes_uses_plain_length(self, header_bytes):
        name = "n" * 254
        raw = header_bytes(1) + _container(name, 1, 0, b"")
        assert raw[7] == 254
        assert decode(raw)[0].name == name

    def test_name_of_255_bytes_uses_escape(self, header_bytes):
        name = "n" * 255
        raw = header_bytes(1) + _container(name, 1, 0, b"")
        assert raw[7] == 0xFF
        assert struct.unpack_from("<H", raw, 8)[0] == 255
        assert decode(raw)[0].name == name

    def test_long_string_element(self, header_bytes):
        value = "v" * 1000
        data = header_bytes(1) + _container("s", 3, 1, _string(value.encode()))
        assert decode(data)[0].elements == (value,)


# === Truncation and trailing bytes ===


class TestBounds:
    def test_truncated_elements(self, header_bytes):
        data = header_bytes(1) + _container("t", 1, 4, struct.pack("<2I", 1, 2))
        with pytest.raises(FormatError, match="unexpected end of buffer"):
            decode(data)

    def test_missing_container(self, header_bytes):
        with pytest.raises(FormatError, match="unexpected end of buffer"):
            decode(header_bytes(2) + _container("only", 1, 0, b""))

    def test_truncated_string(self, header_bytes):
        data = header_bytes(1) + struct.pack("<B", 10) + b"abc"
        with pytest.raises(FormatError):
            decode(data)

    def test_huge_element_count_fails_cleanly(self, header_bytes):
        data = header_bytes(1) + _container("big", 2, 0xFFFFFFFF, b"\x00" * 8)
        with pytest.raises(FormatError, match="unexpected end of buffer"):
            decode(data)

    def test_invalid_utf8(self, header_bytes):
        data = header_bytes(1) + _string(b"\xff\xfe") + struct.pack("<BI", 1, 0)
        with pytest.raises(FormatError, match="invalid UTF-8"):
            decode(data)

    def test_trailing_bytes_lenient(self, header_bytes, caplog):
        data = header_bytes(0) + b"\x00\x01"
        with caplog.at_level("WARNING", logger="tgph"):
            assert decode(data) == []
        assert "trailing bytes" in caplog.text

    def test_trailing_bytes_strict(self, header_bytes):
        with pytest.raises(FormatError, match="trailing bytes"):
            decode(header_bytes(0) + b"\x00", strict=True)


# === Round trip ===


class TestRoundTrip:
    def test_round_trip_mixed(self):
        containers = [
            Container("Unix timestamp", ElementType.UINT32, (0, 15, 30, 0xFFFFFFFF)),
            Container("CPU Usage", ElementType.FLOAT32, (0.5, 12.25, 99.0)),
            Container("Host name", ElementType.STRING, ("a", "é" * 200, "x" * 300)),
            Container("n" * 255, ElementType.UINT32, ()),
        ]
        assert decode(encode(containers)) == containers

    def test_accepts_bytearray_and_memoryview(self, telemetry_containers):
        raw = encode(telemetry_containers)
        assert decode(bytearray(raw)) == telemetry_containers
        assert decode(memoryview(raw)) == telemetry_containers


class TestByteCursor:
    def test_reads_advance_offset(self):
        cursor = ByteCursor(struct.pack("<BHI", 1, 2, 3))
        assert cursor.read_u8() == 1
        assert cursor.read_u16() == 2
        assert cursor.read_u32() == 3
        assert cursor.offset == 7
        assert cursor.remaining == 0

    def test_error_reports_offset(self):
        cursor = ByteCursor(b"\x01")
        cursor.read_u8()
        with pytest.raises(FormatError, match="offset 1"):
            cursor.read_u16()
