"""Unit tests for byte cursor primitives and the varint format."""

from __future__ import annotations

import pytest

from blockcodec.codec.octets import (
    MAX_VARINT,
    OctetsReader,
    OctetsWriter,
    varint_len,
    varint_parse_len,
)


class TestVarintLength:
    """Test varint length class selection."""

    @pytest.mark.parametrize(
        ("value", "length"),
        [
            (0, 1),
            (63, 1),
            (64, 2),
            (16383, 2),
            (16384, 4),
            ((1 << 30) - 1, 4),
            (1 << 30, 8),
            (MAX_VARINT, 8),
        ],
    )
    def test_class_boundaries(self, value: int, length: int) -> None:
        """Test the smallest class is picked on each side of a boundary."""
        assert varint_len(value) == length

    def test_too_large(self) -> None:
        """Test 2^62 cannot be represented."""
        with pytest.raises(ValueError, match="too large"):
            varint_len(1 << 62)

    def test_negative(self) -> None:
        """Test negative values are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            varint_len(-1)

    def test_parse_len(self) -> None:
        """Test the first byte announces the total length."""
        assert varint_parse_len(0x00) == 1
        assert varint_parse_len(0x3F) == 1
        assert varint_parse_len(0x40) == 2
        assert varint_parse_len(0x80) == 4
        assert varint_parse_len(0xC0) == 8


class TestOctetsWriter:
    """Test OctetsWriter functionality."""

    def test_put_varint(self) -> None:
        """Test varint encodings of each class."""
        buf = bytearray(15)
        writer = OctetsWriter(buf)
        writer.put_varint(37)
        writer.put_varint(0x1234)
        writer.put_varint(494878333)
        writer.put_varint(0xDEADBEEF)

        assert writer.off() == 15
        assert bytes(buf) == bytes.fromhex("25" "5234" "9d7f3e7d" "c0000000deadbeef")

    def test_put_bytes(self) -> None:
        """Test writing raw bytes."""
        buf = bytearray(4)
        writer = OctetsWriter(buf)
        writer.put_bytes(b"\x12\x34")

        assert writer.off() == 2
        assert writer.cap() == 2
        assert writer.written() == b"\x12\x34"

    def test_overrun_writes_nothing(self) -> None:
        """Test a write that does not fit leaves the buffer untouched."""
        buf = bytearray(3)
        writer = OctetsWriter(buf)
        writer.put_bytes(b"\xaa")

        with pytest.raises(IndexError, match="Not enough space"):
            writer.put_varint(0x1_0000)

        assert writer.off() == 1
        assert bytes(buf) == b"\xaa\x00\x00"

    def test_exact_fit(self) -> None:
        """Test a write may fill the buffer exactly."""
        buf = bytearray(2)
        writer = OctetsWriter(buf)
        writer.put_varint(0x1234)

        assert writer.cap() == 0

    def test_unrepresentable_varint(self) -> None:
        """Test varints >= 2^62 are rejected before writing."""
        writer = OctetsWriter(bytearray(16))

        with pytest.raises(ValueError):
            writer.put_varint(1 << 62)
        assert writer.off() == 0

    def test_readonly_buffer(self) -> None:
        """Test immutable buffers are refused."""
        with pytest.raises(TypeError, match="writable"):
            OctetsWriter(memoryview(b"\x00\x00"))

    def test_memoryview_slice(self) -> None:
        """Test writing into a window of a larger buffer."""
        buf = bytearray(6)
        writer = OctetsWriter(memoryview(buf)[2:4])
        writer.put_bytes(b"\xff\xee")

        assert bytes(buf) == b"\x00\x00\xff\xee\x00\x00"


class TestOctetsReader:
    """Test OctetsReader functionality."""

    def test_get_varint(self) -> None:
        """Test reading varints of each class."""
        reader = OctetsReader(bytes.fromhex("25" "5234" "9d7f3e7d" "c0000000deadbeef"))

        assert reader.get_varint() == 37
        assert reader.get_varint() == 0x1234
        assert reader.get_varint() == 494878333
        assert reader.get_varint() == 0xDEADBEEF
        assert reader.cap() == 0

    def test_non_minimal_varint(self) -> None:
        """Test a value encoded in a larger class than needed still decodes."""
        reader = OctetsReader(b"\x40\x25")

        assert reader.get_varint() == 37

    def test_truncated_varint(self) -> None:
        """Test a varint cut short raises without consuming."""
        reader = OctetsReader(b"\x80\x01")

        with pytest.raises(IndexError, match="Not enough data"):
            reader.get_varint()
        assert reader.off() == 0

    def test_empty_varint(self) -> None:
        """Test reading a varint from an empty buffer."""
        with pytest.raises(IndexError, match="past end"):
            OctetsReader(b"").get_varint()

    def test_get_bytes(self) -> None:
        """Test reading raw bytes returns owned copies."""
        source = bytearray(b"\x12\x34\x56")
        reader = OctetsReader(source)
        data = reader.get_bytes(2)
        source[0] = 0

        assert data == b"\x12\x34"
        assert isinstance(data, bytes)
        assert reader.off() == 2

    def test_get_bytes_truncated(self) -> None:
        """Test reading more bytes than available."""
        reader = OctetsReader(b"\x00\x01")

        with pytest.raises(IndexError):
            reader.get_bytes(3)
        assert reader.off() == 0

    def test_bytes_with_varint_length(self) -> None:
        """Test length-prefixed bytes."""
        reader = OctetsReader(b"\x03\x01\x02\x03\xff")

        assert reader.get_bytes_with_varint_length() == b"\x01\x02\x03"
        assert reader.off() == 4

    def test_bytes_with_varint_length_truncated(self) -> None:
        """Test a payload shorter than its prefix restores the position."""
        reader = OctetsReader(b"\x02\x01")

        with pytest.raises(IndexError):
            reader.get_bytes_with_varint_length()
        assert reader.off() == 0

    def test_get_u8(self) -> None:
        """Test single byte access."""
        reader = OctetsReader(b"\x7f\x80")

        assert reader.peek_u8() == 0x7F
        assert reader.get_u8() == 0x7F
        assert reader.get_u8() == 0x80
        with pytest.raises(IndexError):
            reader.get_u8()


class TestRoundTrip:
    """Test writer/reader round-trips."""

    def test_roundtrip_mixed(self) -> None:
        """Test mixed primitives round-trip."""
        buf = bytearray(32)
        writer = OctetsWriter(buf)
        writer.put_varint(MAX_VARINT)
        writer.put_bytes(b"\x99")
        writer.put_varint(0)

        reader = OctetsReader(writer.written())
        assert reader.get_varint() == MAX_VARINT
        assert reader.get_bytes(1) == b"\x99"
        assert reader.get_varint() == 0
        assert reader.cap() == 0
