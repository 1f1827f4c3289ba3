"""Record size calculation utilities.

This module provides functions to calculate the encoded size of a record
without actually encoding it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Hashable, Mapping, Optional

from ..codec.field import Field
from ..codec.octets import MAX_VARINT, varint_len
from ..codec.spec import Bytes, FixedBytes, VarInt
from ..codec.value import BytesValue, IntValue, Value

if TYPE_CHECKING:
    from ..codec.block import Block


def varint_size(value: int) -> int:
    """Return the encoded size of value as a varint (1, 2, 4 or 8).

    Raises:
        ValueError: If value is negative or >= 2^62

    Example:
        >>> varint_size(63), varint_size(64), varint_size(0xdeadbeef)
        (1, 2, 8)
    """
    return varint_len(value)


def field_size(field: Field, value: Optional[Any] = None) -> Optional[int]:
    """Calculate the bytes a field occupies for a given value.

    Constant fields need no value. Returns None when the size of a caller
    supplied field depends on a value that was not given. The value itself is
    not validated beyond what is needed to size it.

    Args:
        field: Field to size
        value: Caller value, or None

    Returns:
        Size in bytes, or None if unknown
    """
    spec = field.spec
    static = spec.static_size()
    if static is not None:
        return static
    if value is None:
        return None

    value = Value.wrap(value)
    if isinstance(spec, VarInt):
        if not isinstance(value, IntValue) or value.value > MAX_VARINT:
            return None
        return varint_len(value.value)
    if isinstance(spec, Bytes):
        if not isinstance(value, BytesValue):
            return None
        return varint_len(len(value.value)) + len(value.value)
    return None


def field_sizes(block: Block, values: Mapping[Hashable, Any]) -> list[tuple[Hashable, Optional[int]]]:
    """Get the size in bytes of each field, in declaration order.

    Args:
        block: Block to analyze
        values: Field name -> value

    Returns:
        List of (field name, size) pairs; size is None when unknown

    Example:
        >>> from blockcodec import Block, FixedBytes, VarInt
        >>> block = Block()
        >>> _ = block.add_field("magic", FixedBytes(b"\\xba\\xad"))
        >>> _ = block.add_field("counter", VarInt.free())
        >>> field_sizes(block, {"counter": 300})
        [('magic', 2), ('counter', 2)]
    """
    return [(field.name, field_size(field, values.get(field.name))) for field in block]


def encoded_size(block: Block, values: Mapping[Hashable, Any]) -> int:
    """Calculate the encoded size of a record in bytes.

    Every value is checked the way Block.encode() checks it, so a mapping
    that sizes successfully only fails to encode for lack of space.

    Args:
        block: Block describing the layout
        values: Field name -> value, as passed to Block.encode()

    Returns:
        Exact number of bytes Block.encode() will write

    Raises:
        NoValueProvided: A free field has no value
        InvalidValue: A value cannot be encoded by its field
    """
    total = 0
    for field in block:
        value = field.check(values.get(field.name), total)
        total += field_size(field, value)
    return total


def min_encoded_size(block: Block) -> int:
    """Return the smallest possible record size for block.

    Free varints count as one byte and varint-prefixed bytes as an empty
    payload.
    """
    return sum(field.spec.min_size() for field in block)


def max_field_size(field: Field) -> Optional[int]:
    """Return the largest size a field can take, or None if unbounded."""
    spec = field.spec
    if isinstance(spec, VarInt) and spec.fixed is None:
        return 8
    if isinstance(spec, (VarInt, FixedBytes)) or spec.length is not None:
        return spec.static_size()
    return None
