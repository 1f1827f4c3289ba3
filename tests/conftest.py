"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from blockcodec import Block, Bytes, FixedBytes, VarInt

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture
def scenario_block() -> Block:
    """Block exercising every field kind once."""
    block = Block()
    block.add_field("fixed_varint", VarInt.fixed_value(0xDEADBEEF))
    block.add_field("varint", VarInt.free())
    block.add_field("bytes_fixed_len", Bytes.fixed_length(1))
    block.add_field("bytes_var_len", Bytes.varint_prefixed())
    block.add_field("fixed_bytes", FixedBytes(b"\xba\xad\xf0\x0d"))
    return block


@pytest.fixture
def scenario_values() -> dict:
    """Values for the free fields of scenario_block."""
    return {
        "varint": 0x1234,
        "bytes_fixed_len": b"\x01",
        "bytes_var_len": b"\x01\x02\x03",
    }


@pytest.fixture
def scenario_bytes() -> bytes:
    """Wire form of scenario_values under scenario_block."""
    return bytes.fromhex(
        "c0000000deadbeef"  # fixed varint
        "5234"  # varint
        "01"  # bytes with fixed len
        "03010203"  # bytes with var len
        "baadf00d"  # fixed bytes
    )


@pytest.fixture
def hello_definition_path() -> Path:
    """Path to the example block definition document."""
    return EXAMPLES_DIR / "hello_block.json"
