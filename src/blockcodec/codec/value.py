"""Runtime values moved between callers and the codec.

A Value is either an IntValue (unsigned, below 2^64) or BytesValue. Decoded bytes
always own their data; they never reference the source buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ..exceptions import TypeMismatch


class Value:
    """Base class of the IntValue / BytesValue tagged union.

    Use the accessors instead of isinstance checks when the expected variant
    is known:

        >>> IntValue(7).as_integer()
        7
        >>> BytesValue(b"\\x01").as_integer()
        Traceback (most recent call last):
        ...
        blockcodec.exceptions.TypeMismatch: expected IntValue, got BytesValue
    """

    __slots__ = ()

    def as_integer(self) -> int:
        raise TypeMismatch("IntValue", type(self).__name__)

    def as_bytes(self) -> bytes:
        raise TypeMismatch("BytesValue", type(self).__name__)

    def into_bytes(self) -> bytearray:
        """Return a new, independently owned copy of the byte payload."""
        return bytearray(self.as_bytes())

    @staticmethod
    def wrap(obj: Any) -> Any:
        """Lift a plain Python int or bytes-like object into a Value.

        Values pass through unchanged. Anything else (bools, negative or
        oversized ints) is returned as-is so the field can reject it with
        InvalidValue.
        """
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, bool):
            return obj
        if isinstance(obj, int):
            return IntValue(obj) if 0 <= obj < (1 << 64) else obj
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return BytesValue(bytes(obj))
        return obj


@dataclass(frozen=True)
class IntValue(Value):
    """Unsigned 64-bit integer value."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"IntValue must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value < (1 << 64):
            raise ValueError(f"IntValue must be 0 to 2^64-1, got {self.value}")

    def as_integer(self) -> int:
        return self.value


@dataclass(frozen=True)
class BytesValue(Value):
    """Byte sequence value."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytes):
            object.__setattr__(self, "value", bytes(self.value))

    def as_bytes(self) -> bytes:
        return self.value

    def __len__(self) -> int:
        return len(self.value)


@dataclass(frozen=True)
class ValueInfo:
    """A decoded value and the offset in the source buffer where its field began.

    Attributes:
        value: Decoded value
        offset: Byte position of the field's first byte
    """

    value: Union[IntValue, BytesValue]
    offset: int
