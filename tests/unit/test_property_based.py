"""Property-based tests using hypothesis."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from blockcodec import (
    MAX_VARINT,
    Block,
    Bytes,
    FixedBytes,
    InvalidValue,
    NotEnoughData,
    NotEnoughSpace,
    OctetsReader,
    OctetsWriter,
    VarInt,
    encoded_size,
)


def build_block() -> Block:
    """Block with every field kind."""
    block = Block()
    block.add_field("fixed_varint", VarInt.fixed_value(0xDEADBEEF))
    block.add_field("varint", VarInt.free())
    block.add_field("bytes_fixed_len", Bytes.fixed_length(1))
    block.add_field("bytes_var_len", Bytes.varint_prefixed())
    block.add_field("fixed_bytes", FixedBytes(b"\xba\xad\xf0\x0d"))
    return block


BLOCK = build_block()

record_values = st.fixed_dictionaries(
    {
        "varint": st.integers(min_value=0, max_value=MAX_VARINT),
        "bytes_fixed_len": st.binary(min_size=1, max_size=1),
        "bytes_var_len": st.binary(max_size=300),
    }
)


class TestVarintProperties:
    """Property-based tests for the varint format."""

    @given(value=st.integers(min_value=0, max_value=MAX_VARINT))
    def test_minimal_class(self, value: int) -> None:
        """Test the smallest class whose capacity exceeds the value is used."""
        writer = OctetsWriter(bytearray(8))
        writer.put_varint(value)
        expected = next(n for n, limit in ((1, 6), (2, 14), (4, 30), (8, 62)) if value < 1 << limit)

        assert writer.off() == expected
        assert OctetsReader(writer.written()).get_varint() == value

    @given(value=st.integers(min_value=MAX_VARINT + 1, max_value=(1 << 64) - 1))
    def test_too_large_is_invalid(self, value: int) -> None:
        """Test integers >= 2^62 cannot be encoded by a free field."""
        block = Block()
        block.add_field("n", VarInt.free())

        with pytest.raises(InvalidValue) as exc_info:
            block.encode({"n": value}, bytearray(16))
        assert exc_info.value.field == "n"


class TestBlockProperties:
    """Property-based tests for blocks."""

    @given(values=record_values)
    def test_roundtrip(self, values: dict) -> None:
        """Test decode(encode(values)) returns the free values."""
        data = BLOCK.to_bytes(values)
        decoded, consumed = BLOCK.decode(data)

        assert consumed == len(data)
        assert decoded["varint"].value.as_integer() == values["varint"]
        assert decoded["bytes_fixed_len"].value.as_bytes() == values["bytes_fixed_len"]
        assert decoded["bytes_var_len"].value.as_bytes() == values["bytes_var_len"]

    @given(values=record_values)
    def test_reencode_decoded(self, values: dict) -> None:
        """Test a decoded mapping, constants included, re-encodes identically."""
        data = BLOCK.to_bytes(values)
        decoded, _ = BLOCK.decode(data)

        assert BLOCK.to_bytes({name: info.value for name, info in decoded.items()}) == data

    @given(values=record_values)
    def test_deterministic(self, values: dict) -> None:
        """Test encoding is deterministic."""
        assert BLOCK.to_bytes(values) == BLOCK.to_bytes(dict(values))

    @given(values=record_values)
    def test_size_matches(self, values: dict) -> None:
        """Test encoded_size equals the bytes written."""
        buf = bytearray(512)

        assert encoded_size(BLOCK, values) == BLOCK.encode(values, buf)

    @given(values=record_values)
    def test_space_boundary(self, values: dict) -> None:
        """Test one byte short fails on the last field, exact size succeeds."""
        size = encoded_size(BLOCK, values)

        with pytest.raises(NotEnoughSpace) as exc_info:
            BLOCK.encode(values, bytearray(size - 1))
        assert exc_info.value.field == "fixed_bytes"

        assert BLOCK.encode(values, bytearray(size)) == size
        assert BLOCK.encode(values, bytearray(size + 1)) == size

    @given(values=record_values, cut=st.integers(min_value=1, max_value=4))
    def test_data_boundary(self, values: dict, cut: int) -> None:
        """Test a truncated record fails on the under-read field."""
        data = BLOCK.to_bytes(values)

        with pytest.raises(NotEnoughData) as exc_info:
            BLOCK.decode(data[:-cut])
        assert exc_info.value.field == "fixed_bytes"
        assert exc_info.value.offset == len(data) - 4
