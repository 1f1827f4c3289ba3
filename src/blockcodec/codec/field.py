"""A named field and its per-kind encode/decode rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Optional

from ..exceptions import InvalidValue, NoValueProvided, NotEnoughData, NotEnoughSpace, SchemaError
from .octets import MAX_VARINT, OctetsReader, OctetsWriter
from .spec import Bytes, FieldSpec, FixedBytes, VarInt
from .value import BytesValue, IntValue, Value, ValueInfo


@dataclass(frozen=True)
class Field:
    """A field name bound to its wire encoding rule.

    Attributes:
        name: Hashable schema key (an enum member or string in practice)
        spec: How the field is laid out on the wire
    """

    name: Hashable
    spec: FieldSpec

    def __post_init__(self) -> None:
        if not isinstance(self.spec, (VarInt, Bytes, FixedBytes)):
            raise SchemaError(f"Field {self.name!r}: unsupported spec {self.spec!r}")

    def check(self, value: Optional[Any], offset: int = 0) -> Optional[Value]:
        """Validate a caller value against this field without writing anything.

        Args:
            value: Caller value for the field, or None when absent
            offset: Offset reported in errors

        Returns:
            The value lifted to a Value, or None for a constant given no value

        Raises:
            NoValueProvided: A free field has no value
            InvalidValue: The value conflicts with the spec
        """
        value = Value.wrap(value) if value is not None else None
        spec = self.spec

        if isinstance(spec, VarInt):
            if value is not None and not isinstance(value, IntValue):
                raise InvalidValue(self.name, offset, "expected an integer")
            if spec.fixed is not None:
                if value is not None and value.value != spec.fixed:
                    raise InvalidValue(
                        self.name, offset, f"expected {spec.fixed}, got {value.value}"
                    )
                return value
            if value is None:
                raise NoValueProvided(self.name, offset)
            if value.value > MAX_VARINT:
                raise InvalidValue(
                    self.name, offset, f"{value.value} exceeds varint max {MAX_VARINT}"
                )
            return value

        if isinstance(spec, Bytes):
            if value is None:
                raise NoValueProvided(self.name, offset)
            if not isinstance(value, BytesValue):
                raise InvalidValue(self.name, offset, "expected bytes")
            if spec.length is not None and len(value) != spec.length:
                raise InvalidValue(
                    self.name, offset, f"expected {spec.length} bytes, got {len(value)} bytes"
                )
            if spec.length is None and len(value) > MAX_VARINT:
                raise InvalidValue(self.name, offset, "payload too long for a varint prefix")
            return value

        if isinstance(spec, FixedBytes):
            if value is not None:
                if not isinstance(value, BytesValue):
                    raise InvalidValue(self.name, offset, "expected bytes")
                if value.value != spec.literal:
                    raise InvalidValue(
                        self.name,
                        offset,
                        f"expected {spec.literal.hex()}, got {value.value.hex()}",
                    )
            return value

        raise SchemaError(f"Field {self.name!r}: unsupported spec {spec!r}")

    def encode(self, value: Optional[Any], writer: OctetsWriter) -> None:
        """Write this field to writer.

        Args:
            value: Caller value for the field, or None when absent
            writer: Destination cursor

        Raises:
            NoValueProvided: A free field has no value
            InvalidValue: The value conflicts with the spec
            NotEnoughSpace: The destination is exhausted mid-field
        """
        start = writer.off()
        value = self.check(value, start)
        spec = self.spec

        if isinstance(spec, VarInt):
            number = spec.fixed if spec.fixed is not None else value.value
            self._put_varint(writer, number, start)
        elif isinstance(spec, Bytes):
            if spec.length is None:
                self._put_varint(writer, len(value), start)
            self._put_bytes(writer, value.value, start)
        else:
            self._put_bytes(writer, spec.literal, start)

    def decode(self, reader: OctetsReader) -> ValueInfo:
        """Read this field from reader.

        Args:
            reader: Source cursor

        Returns:
            The decoded value and the offset where the field began

        Raises:
            InvalidValue: The wire bytes do not match a declared constant
            NotEnoughData: The source ends before the field does
        """
        start = reader.off()
        spec = self.spec

        try:
            if isinstance(spec, VarInt):
                number = reader.get_varint()
                if spec.fixed is not None and number != spec.fixed:
                    raise InvalidValue(self.name, start, f"expected {spec.fixed}, got {number}")
                return ValueInfo(IntValue(number), start)

            if isinstance(spec, Bytes):
                if spec.length is not None:
                    data = reader.get_bytes(spec.length)
                else:
                    data = reader.get_bytes_with_varint_length()
                return ValueInfo(BytesValue(data), start)

            if isinstance(spec, FixedBytes):
                data = reader.get_bytes(len(spec.literal))
                if data != spec.literal:
                    raise InvalidValue(
                        self.name, start, f"expected {spec.literal.hex()}, got {data.hex()}"
                    )
                return ValueInfo(BytesValue(data), start)
        except IndexError as err:
            raise NotEnoughData(self.name, start, str(err)) from err

        raise SchemaError(f"Field {self.name!r}: unsupported spec {spec!r}")

    @property
    def is_fixed(self) -> bool:
        """True when the value is supplied by the schema rather than the caller."""
        return self.spec.is_fixed

    def _put_varint(self, writer: OctetsWriter, value: int, start: int) -> None:
        try:
            writer.put_varint(value)
        except IndexError as err:
            raise NotEnoughSpace(self.name, start, str(err)) from err

    def _put_bytes(self, writer: OctetsWriter, data: bytes, start: int) -> None:
        try:
            writer.put_bytes(data)
        except IndexError as err:
            raise NotEnoughSpace(self.name, start, str(err)) from err
