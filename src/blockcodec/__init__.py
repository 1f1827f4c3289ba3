"""blockcodec: Schema-Driven Binary Record Codec

A Python library for encoding records into compact byte buffers from an
ordered list of named field definitions (a block), and decoding them back.

Key Features:
- Self-describing variable-length integers (1, 2, 4 or 8 bytes)
- Fixed-length and varint-prefixed byte fields
- Constant fields that double as magic markers, validated on decode
- Precise errors naming the failing field and its offset
- Declarative JSON block definitions validated with Pydantic

Quick Start:
    >>> from blockcodec import Block, Bytes, FixedBytes, VarInt
    >>>
    >>> block = Block()
    >>> _ = block.add_field("magic", FixedBytes(b"\\xba\\xad\\xf0\\x0d"))
    >>> _ = block.add_field("counter", VarInt.free())
    >>> _ = block.add_field("payload", Bytes.varint_prefixed())
    >>>
    >>> buf = bytearray(64)
    >>> written = block.encode({"counter": 0x1234, "payload": b"abc"}, buf)
    >>> values, consumed = block.decode(buf[:written])
    >>> values["counter"].value.as_integer()
    4660
"""

from __future__ import annotations

from .codec import (
    MAX_VARINT,
    Block,
    Bytes,
    BytesValue,
    Field,
    FieldSpec,
    FixedBytes,
    IntValue,
    OctetsReader,
    OctetsWriter,
    Value,
    ValueInfo,
    VarInt,
)
from .exceptions import (
    BlockCodecError,
    DecodeError,
    EncodeError,
    FieldError,
    InvalidValue,
    NoValueProvided,
    NotEnoughData,
    NotEnoughSpace,
    SchemaError,
    TrailingData,
    TypeMismatch,
)
from .schema import BlockDefinition, FieldDefinition, load_block, load_block_definition
from .utils import encoded_size, field_sizes, min_encoded_size, varint_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Block",
    "Field",
    # Field specs
    "FieldSpec",
    "VarInt",
    "Bytes",
    "FixedBytes",
    # Values
    "Value",
    "IntValue",
    "BytesValue",
    "ValueInfo",
    # Byte cursors
    "OctetsReader",
    "OctetsWriter",
    "MAX_VARINT",
    # Exceptions
    "BlockCodecError",
    "SchemaError",
    "TypeMismatch",
    "FieldError",
    "EncodeError",
    "DecodeError",
    "NoValueProvided",
    "InvalidValue",
    "NotEnoughSpace",
    "NotEnoughData",
    "TrailingData",
    # Definitions
    "BlockDefinition",
    "FieldDefinition",
    "load_block",
    "load_block_definition",
    # Sizing
    "encoded_size",
    "field_sizes",
    "min_encoded_size",
    "varint_size",
    # Version
    "__version__",
]
