"""Schema-driven binary record codec.

This module provides the field specs, fields and blocks that describe a
record's wire layout, the values moved in and out of the codec, and the byte
cursor primitives they are built on.
"""

from __future__ import annotations

from .block import Block
from .field import Field
from .octets import MAX_VARINT, OctetsReader, OctetsWriter, varint_len, varint_parse_len
from .spec import Bytes, FieldSpec, FixedBytes, VarInt
from .value import BytesValue, IntValue, Value, ValueInfo

__all__ = [
    "Block",
    "Field",
    "FieldSpec",
    "VarInt",
    "Bytes",
    "FixedBytes",
    "Value",
    "IntValue",
    "BytesValue",
    "ValueInfo",
    "OctetsReader",
    "OctetsWriter",
    "MAX_VARINT",
    "varint_len",
    "varint_parse_len",
]
