"""Byte cursor primitives and the varint wire format.

This module provides bounded reads and writes of raw bytes and variable-length
integers over in-memory buffers. All multi-byte values are big-endian.

Varint layout: the two most-significant bits of the first byte select the total
length of the encoding (00 -> 1 byte, 01 -> 2, 10 -> 4, 11 -> 8). The remaining
6 bits of the first byte followed by the rest of the bytes hold the value::

    value < 2^6    1 byte   [00xxxxxx]
    value < 2^14   2 bytes  [01xxxxxx] [xxxxxxxx]
    value < 2^30   4 bytes  [10xxxxxx] [xxxxxxxx] x2
    value < 2^62   8 bytes  [11xxxxxx] [xxxxxxxx] x6

Example (0x1234):
    0x1234 < 2^14, so two bytes: 0x40 | 0x12, 0x34 -> b"\\x52\\x34"
"""

from __future__ import annotations

from typing import Union

MAX_VARINT = (1 << 62) - 1

# (exclusive upper bound, encoded length) per length class
_VARINT_CLASSES = (
    (1 << 6, 1),
    (1 << 14, 2),
    (1 << 30, 4),
    (1 << 62, 8),
)

BytesLike = Union[bytes, bytearray, memoryview]


def varint_len(value: int) -> int:
    """Return the number of bytes needed to encode value as a varint.

    Args:
        value: Unsigned integer to encode

    Returns:
        1, 2, 4 or 8

    Raises:
        ValueError: If value is negative or not below 2^62
    """
    if value < 0:
        raise ValueError(f"varint requires non-negative value, got {value}")
    for limit, length in _VARINT_CLASSES:
        if value < limit:
            return length
    raise ValueError(f"Value {value} is too large for a varint (max: {MAX_VARINT})")


def varint_parse_len(first: int) -> int:
    """Return the total encoded length announced by the first byte of a varint."""
    return 1 << (first >> 6)


class OctetsWriter:
    """Writes bytes and varints into a caller-owned, fixed-size buffer.

    The writer never grows the buffer. A write that does not fit raises
    IndexError before touching the buffer, so a failed primitive leaves no
    partial bytes behind. Bytes written by earlier successful calls stay.

    Example:
        >>> buf = bytearray(8)
        >>> writer = OctetsWriter(buf)
        >>> writer.put_varint(0x1234)
        >>> writer.put_bytes(b"\\x01")
        >>> writer.off()
        3
    """

    def __init__(self, buf: Union[bytearray, memoryview]) -> None:
        """Initialize a writer over buf.

        Args:
            buf: Writable buffer (bytearray or writable memoryview)

        Raises:
            TypeError: If buf is not writable
        """
        view = memoryview(buf)
        if view.readonly:
            raise TypeError("OctetsWriter requires a writable buffer")
        self._buf = view.cast("B") if view.format != "B" else view
        self._off = 0

    def put_bytes(self, data: BytesLike) -> None:
        """Write raw bytes at the current position.

        Args:
            data: Bytes to write

        Raises:
            IndexError: If the buffer has less than len(data) bytes left
        """
        size = len(data)
        if size > self.cap():
            raise IndexError(f"Not enough space: need {size} bytes, have {self.cap()}")
        self._buf[self._off : self._off + size] = data
        self._off += size

    def put_varint(self, value: int) -> None:
        """Write value using the smallest varint length class.

        Args:
            value: Unsigned integer below 2^62

        Raises:
            ValueError: If value cannot be represented
            IndexError: If the encoding does not fit in the remaining space
        """
        length = varint_len(value)
        encoded = bytearray(value.to_bytes(length, "big"))
        # Length class lives in the top two bits of the first byte
        encoded[0] |= (length.bit_length() - 1) << 6
        self.put_bytes(encoded)

    def off(self) -> int:
        """Return the number of bytes written so far."""
        return self._off

    def cap(self) -> int:
        """Return the number of bytes still available."""
        return len(self._buf) - self._off

    def written(self) -> bytes:
        """Return a copy of the bytes written so far."""
        return bytes(self._buf[: self._off])


class OctetsReader:
    """Reads bytes and varints from an in-memory buffer.

    Example:
        >>> reader = OctetsReader(b"\\x52\\x34\\x01")
        >>> reader.get_varint()
        4660
        >>> reader.get_bytes(1)
        b'\\x01'
    """

    def __init__(self, buf: BytesLike) -> None:
        """Initialize a reader over buf.

        Args:
            buf: Byte buffer to read
        """
        view = memoryview(buf)
        self._buf = view.cast("B") if view.format != "B" else view
        self._off = 0

    def get_bytes(self, size: int) -> bytes:
        """Read exactly size bytes.

        Args:
            size: Number of bytes to read

        Returns:
            A copy of the bytes read

        Raises:
            IndexError: If fewer than size bytes remain
        """
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        if size > self.cap():
            raise IndexError(f"Not enough data: need {size} bytes, have {self.cap()}")
        data = bytes(self._buf[self._off : self._off + size])
        self._off += size
        return data

    def peek_u8(self) -> int:
        """Return the next byte without consuming it.

        Raises:
            IndexError: If the buffer is exhausted
        """
        if self.cap() < 1:
            raise IndexError("Attempted to read past end of buffer")
        return self._buf[self._off]

    def get_u8(self) -> int:
        """Read a single byte."""
        value = self.peek_u8()
        self._off += 1
        return value

    def get_varint(self) -> int:
        """Read a varint.

        Returns:
            Decoded unsigned integer

        Raises:
            IndexError: If the buffer ends before the varint does
        """
        length = varint_parse_len(self.peek_u8())
        if length > self.cap():
            raise IndexError(f"Not enough data: varint needs {length} bytes, have {self.cap()}")
        raw = self.get_bytes(length)
        # Mask off the length class selector
        return int.from_bytes(raw, "big") & ((1 << (length * 8 - 2)) - 1)

    def get_bytes_with_varint_length(self) -> bytes:
        """Read a varint length followed by that many bytes.

        The position is left untouched if either read comes up short.

        Raises:
            IndexError: If the length or the payload is truncated
        """
        start = self._off
        try:
            size = self.get_varint()
            return self.get_bytes(size)
        except IndexError:
            self._off = start
            raise

    def off(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._off

    def cap(self) -> int:
        """Return the number of unread bytes."""
        return len(self._buf) - self._off
