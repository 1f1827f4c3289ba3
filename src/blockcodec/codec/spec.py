"""Field specs: the wire encoding rule of a single field.

A FieldSpec is one of three immutable kinds:

- VarInt: an integer in varint form, either caller-supplied (free) or a
  schema constant (fixed).
- Bytes: a caller-supplied byte sequence, either of an exact length or
  prefixed with its length as a varint.
- FixedBytes: a schema constant byte sequence, typically a magic marker.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..exceptions import SchemaError
from .octets import MAX_VARINT, varint_len


@dataclass(frozen=True)
class VarInt:
    """Variable-length integer field.

    Attributes:
        fixed: Schema constant, or None when the caller supplies the value
    """

    fixed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.fixed is None:
            return
        if isinstance(self.fixed, bool) or not isinstance(self.fixed, int):
            raise SchemaError(f"VarInt constant must be an int, got {type(self.fixed).__name__}")
        if not 0 <= self.fixed <= MAX_VARINT:
            raise SchemaError(
                f"VarInt constant {self.fixed} out of bounds [0, {MAX_VARINT}]"
            )

    @classmethod
    def free(cls) -> VarInt:
        return cls()

    @classmethod
    def fixed_value(cls, value: int) -> VarInt:
        return cls(fixed=value)

    @property
    def is_fixed(self) -> bool:
        return self.fixed is not None

    def static_size(self) -> Optional[int]:
        """Encoded size in bytes if known from the schema alone."""
        if self.fixed is None:
            return None
        return varint_len(self.fixed)

    def min_size(self) -> int:
        return self.static_size() or 1


@dataclass(frozen=True)
class Bytes:
    """Caller-supplied byte sequence field.

    Attributes:
        length: Exact payload length, or None for a varint length prefix
    """

    length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.length is None:
            return
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise SchemaError(f"Bytes length must be an int, got {type(self.length).__name__}")
        if self.length < 0:
            raise SchemaError(f"Bytes length must be >= 0, got {self.length}")

    @classmethod
    def fixed_length(cls, length: int) -> Bytes:
        return cls(length=length)

    @classmethod
    def varint_prefixed(cls) -> Bytes:
        return cls()

    @property
    def is_fixed(self) -> bool:
        # Payload is caller-supplied in both forms
        return False

    def static_size(self) -> Optional[int]:
        return self.length

    def min_size(self) -> int:
        # An empty prefixed payload still costs one length byte
        return self.length if self.length is not None else 1


@dataclass(frozen=True)
class FixedBytes:
    """Constant byte sequence emitted verbatim and validated on decode.

    Attributes:
        literal: The exact bytes on the wire
    """

    literal: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.literal, (bytes, bytearray, memoryview)):
            raise SchemaError(
                f"FixedBytes literal must be bytes, got {type(self.literal).__name__}"
            )
        # Normalize to immutable bytes so the spec stays hashable
        object.__setattr__(self, "literal", bytes(self.literal))

    @property
    def is_fixed(self) -> bool:
        return True

    def static_size(self) -> Optional[int]:
        return len(self.literal)

    def min_size(self) -> int:
        return len(self.literal)


FieldSpec = Union[VarInt, Bytes, FixedBytes]


def describe(spec: FieldSpec) -> str:
    """Return a short human readable description of a spec."""
    if isinstance(spec, VarInt):
        return "varint" if spec.fixed is None else f"varint = {spec.fixed:#x}"
    if isinstance(spec, Bytes):
        return "bytes[varint len]" if spec.length is None else f"bytes[{spec.length}]"
    if isinstance(spec, FixedBytes):
        return f"fixed bytes {spec.literal.hex()}"
    raise SchemaError(f"Unsupported field spec {spec!r}")
