#!/usr/bin/env python3
"""Basic usage example for blockcodec.

This example demonstrates:
1. Defining a block layout in code
2. Calculating record sizes
3. Encoding a record into a buffer
4. Decoding it back, with field offsets
5. Handling codec errors
"""

from __future__ import annotations

import enum

from blockcodec import (
    Block,
    Bytes,
    FixedBytes,
    NotEnoughData,
    NotEnoughSpace,
    VarInt,
    encoded_size,
    field_sizes,
)


class Name(enum.Enum):
    """Field names of the example record."""

    MAGIC = "magic"
    VERSION = "version"
    SEQUENCE = "sequence"
    SENDER = "sender"
    BODY = "body"


def build_block() -> Block:
    """Build the example layout."""
    block = Block(unique_names=True)
    block.add_field(Name.MAGIC, FixedBytes(b"\xba\xad\xf0\x0d"))
    block.add_field(Name.VERSION, VarInt.fixed_value(2))
    block.add_field(Name.SEQUENCE, VarInt.free())
    block.add_field(Name.SENDER, Bytes.fixed_length(6))
    block.add_field(Name.BODY, Bytes.varint_prefixed())
    return block


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("blockcodec Basic Usage Example")
    print("=" * 60)
    print()

    block = build_block()
    values = {
        Name.SEQUENCE: 70000,
        Name.SENDER: b"\x00\x1b\x63\x84\x45\xe6",
        Name.BODY: b"hello, block",
    }

    # Analyze field sizes
    print("1. Analyzing field sizes...")
    for name, size in field_sizes(block, values):
        print(f"   {name.value}: {size} bytes")
    total = encoded_size(block, values)
    print(f"   Total: {total} bytes")
    print()

    # Encode the record
    print("2. Encoding...")
    buf = bytearray(64)
    written = block.encode(values, buf)
    print(f"   Encoded size: {written} bytes")
    print(f"   Hex: {buf[:written].hex()}")
    print()

    # Decode the record
    print("3. Decoding...")
    decoded, consumed = block.decode(buf[:written])
    for name, info in decoded.items():
        print(f"   @{info.offset:<3} {name.value}: {info.value}")
    print(f"   Consumed: {consumed} bytes")
    print()

    # Error handling
    print("4. Error handling...")
    try:
        block.encode(values, bytearray(8))
    except NotEnoughSpace as e:
        print(f"   Small buffer: {e}")
    try:
        block.decode(buf[: written - 1])
    except NotEnoughData as e:
        print(f"   Truncated record: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
