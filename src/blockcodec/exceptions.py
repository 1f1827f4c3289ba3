"""Exception hierarchy for blockcodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BlockCodecError for easy catching of any blockcodec-specific error.

Per-field codec failures carry the name of the offending field and the byte
offset at which that field started, so a caller can tell exactly where a record
went wrong without any logging or side channel.
"""

from __future__ import annotations

from typing import Hashable, Optional


class BlockCodecError(Exception):
    """Base exception for all blockcodec errors."""

    pass


class SchemaError(BlockCodecError):
    """Raised when a field spec, block or block definition is invalid.

    Examples:
        - Fixed varint constant outside [0, 2^62)
        - Negative fixed length
        - Duplicate field name in a block created with unique_names=True
        - Malformed block definition document
    """

    pass


class TypeMismatch(BlockCodecError, TypeError):
    """Raised when a Value accessor is called against the wrong variant.

    Attributes:
        expected: Variant the caller asked for ("IntValue" or "BytesValue")
        actual: Variant actually stored in the value
    """

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class FieldError(BlockCodecError):
    """Base class for failures attributed to a single field.

    Attributes:
        field: Name of the field being encoded or decoded, or None when the
            failure belongs to the record as a whole
        offset: Buffer offset where the field started
    """

    reason = "field error"

    def __init__(
        self, field: Optional[Hashable], offset: int = 0, detail: Optional[str] = None
    ) -> None:
        if field is None:
            message = f"{self.reason} at offset {offset}"
        else:
            message = f"{self.reason} for field {field!r} at offset {offset}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.field = field
        self.offset = offset
        self.detail = detail


class EncodeError(FieldError):
    """Raised when encoding a record fails.

    Examples:
        - A free field has no value in the mapping
        - The destination buffer is too small
        - A value conflicts with a constant
    """

    reason = "encode failed"


class DecodeError(FieldError):
    """Raised when decoding a record fails.

    Examples:
        - Truncated data (insufficient bytes)
        - A magic marker or constant varint does not match
        - Trailing bytes left over in strict mode
    """

    reason = "decode failed"


class NoValueProvided(EncodeError):
    """Encoding requires a caller value that was not supplied."""

    reason = "no value provided"


class NotEnoughSpace(EncodeError):
    """The destination buffer was exhausted while writing the field."""

    reason = "not enough space"


class NotEnoughData(DecodeError):
    """The source buffer was exhausted while reading the field."""

    reason = "not enough data"


class TrailingData(DecodeError):
    """Bytes remain after the last field of a record that must span its input.

    Not attributed to a field: field is None and offset is where the unread
    bytes begin.
    """

    reason = "trailing data"


class InvalidValue(EncodeError, DecodeError):
    """A value conflicts with the field's constraints.

    Raised on encode when a supplied value does not match a constant, has the
    wrong variant or the wrong length, and on decode when the bytes on the wire
    do not match a declared constant. Catchable as either EncodeError or
    DecodeError.
    """

    reason = "invalid value"
