"""Block analysis and record inspection CLI commands."""

from __future__ import annotations

from pathlib import Path

from ..codec.block import Block
from ..codec.spec import describe
from ..codec.value import BytesValue, ValueInfo
from ..schema import load_block_definition
from ..utils.sizing import max_field_size, min_encoded_size


def analyze_file(file_path: Path) -> None:
    """Print the wire layout of the block defined in a JSON file.

    Args:
        file_path: Path to a block definition document
    """
    definition = load_block_definition(file_path)
    block = definition.build()

    print("|" * 7, "blockcodec: Schema-Driven Binary Record Codec", "|" * 7)
    title = definition.name or file_path.stem
    print(f"{'=' * 19} {title} {'=' * 19}")
    print(f"{len(block)} field{'s' if len(block) != 1 else ''} loaded.")
    print("Field sizes are in bytes.")
    print()
    analyze_block(block)


def analyze_block(block: Block) -> None:
    """Print a per-field breakdown of a block's layout.

    Args:
        block: Block to analyze
    """
    bounded = True
    max_total = 0
    for index, field in enumerate(block):
        size = field.spec.static_size()
        upper = max_field_size(field)
        if upper is None:
            bounded = False
        else:
            max_total += upper

        if size is not None:
            size_text = str(size)
        elif upper is not None:
            size_text = f"1-{upper}"
        else:
            size_text = "variable"

        label = f"{index}. {field.name}"
        print(f"{label} {'.' * max(1, 40 - len(label))} {size_text:>8}   {describe(field.spec)}")

    print()
    print(f"Minimum size of record: {min_encoded_size(block)} bytes")
    if bounded:
        print(f"Maximum size of record: {max_total} bytes")
    else:
        print("Maximum size of record: unbounded")


def format_value(info: ValueInfo) -> str:
    """Render a decoded value for display."""
    if isinstance(info.value, BytesValue):
        return f"0x{info.value.value.hex()}" if info.value.value else "(empty)"
    return f"{info.value.value} ({info.value.value:#x})"


def decode_hex(block: Block, hex_data: str) -> None:
    """Decode a hex-encoded record and print each field.

    Args:
        block: Block describing the record
        hex_data: Record bytes as hex; whitespace is ignored

    Raises:
        ValueError: If hex_data is not valid hex
        FieldError: If the record does not decode
    """
    data = bytes.fromhex("".join(hex_data.split()))
    values, consumed = block.decode(data)

    for field in block:
        info = values[field.name]
        marker = " (constant)" if field.is_fixed else ""
        print(f"@{info.offset:<4} {field.name}: {format_value(info)}{marker}")

    print()
    print(f"Consumed {consumed} of {len(data)} bytes")
    if consumed < len(data):
        print(f"Trailing bytes: {data[consumed:].hex()}")
