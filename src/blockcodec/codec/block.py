"""Blocks: ordered field layouts and record-level encode/decode.

A Block is built once and then used for any number of encode/decode calls.
Both directions make a single fail-fast pass over the fields in declaration
order and stop at the first failing field.

Neither direction is transactional:

- encode() leaves the bytes of every field written before the failure in the
  destination buffer (and possibly part of the failing field, e.g. its length
  prefix).
- decode() leaves every value decoded before the failure in the caller's
  mapping when one is passed in.

Use to_bytes() when an all-or-nothing encode is needed; it encodes into a
scratch buffer and only returns on success.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, Iterator, Mapping, MutableMapping, Optional, Tuple, Union

from ..exceptions import FieldError, SchemaError, TrailingData
from .field import Field
from .octets import BytesLike, OctetsReader, OctetsWriter
from .spec import FieldSpec
from .value import ValueInfo

logger = logging.getLogger(__name__)


class Block:
    """Ordered sequence of fields defining one record's wire layout.

    Example:
        >>> from blockcodec import Bytes, FixedBytes, VarInt
        >>> block = Block()
        >>> _ = block.add_field("magic", FixedBytes(b"\\xba\\xad"))
        >>> _ = block.add_field("counter", VarInt.free())
        >>> _ = block.add_field("payload", Bytes.varint_prefixed())
        >>> block.to_bytes({"counter": 5, "payload": b"hi"})
        b'\\xba\\xad\\x05\\x02hi'
    """

    def __init__(self, unique_names: bool = False) -> None:
        """Initialize an empty block.

        Args:
            unique_names: Reject duplicate field names in add_field()
        """
        self._fields: list[Field] = []
        self.unique_names = unique_names

    def add_field(self, name: Hashable, spec: FieldSpec) -> Field:
        """Append a field to the layout.

        Args:
            name: Field name used as the key in value mappings
            spec: Wire encoding rule of the field

        Returns:
            The new Field

        Raises:
            SchemaError: If spec is invalid, or name is a duplicate and the
                block was created with unique_names=True
        """
        if self.unique_names and any(f.name == name for f in self._fields):
            raise SchemaError(f"Duplicate field name {name!r}")
        field = Field(name, spec)
        self._fields.append(field)
        return field

    @property
    def fields(self) -> Tuple[Field, ...]:
        return tuple(self._fields)

    def field(self, name: Hashable) -> Field:
        """Return the first field called name.

        Raises:
            KeyError: If no field has that name
        """
        for field in self._fields:
            if field.name == name:
                return field
        raise KeyError(name)

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __repr__(self) -> str:
        names = ", ".join(repr(f.name) for f in self._fields)
        return f"Block([{names}])"

    def encode(self, values: Mapping[Hashable, Any], buffer: Union[bytearray, memoryview]) -> int:
        """Encode values into buffer, starting at its first byte.

        Args:
            values: Field name -> Value (plain ints and bytes are accepted too)
            buffer: Writable destination; it is never resized

        Returns:
            Number of bytes written

        Raises:
            NoValueProvided: A free field has no value
            InvalidValue: A value conflicts with its field
            NotEnoughSpace: The buffer is too small
        """
        writer = OctetsWriter(buffer)
        for field in self._fields:
            try:
                field.encode(values.get(field.name), writer)
            except FieldError as err:
                logger.debug("encode stopped at field %r: %s", field.name, err)
                raise
        logger.debug("encoded %d fields into %d bytes", len(self._fields), writer.off())
        return writer.off()

    def decode(
        self,
        buffer: BytesLike,
        values: Optional[MutableMapping[Hashable, ValueInfo]] = None,
    ) -> Tuple[MutableMapping[Hashable, ValueInfo], int]:
        """Decode a record from the start of buffer.

        Args:
            buffer: Source bytes; trailing bytes after the record are ignored
            values: Mapping to fill in place; a new dict when omitted. On
                failure it keeps the values decoded before the failing field.

        Returns:
            Tuple of (field name -> ValueInfo, bytes consumed). Constant fields
            are included alongside free ones.

        Raises:
            InvalidValue: A constant field does not match the wire bytes
            NotEnoughData: The buffer ends mid-record
        """
        if values is None:
            values = {}
        reader = OctetsReader(buffer)
        for field in self._fields:
            try:
                values[field.name] = field.decode(reader)
            except FieldError as err:
                logger.debug("decode stopped at field %r: %s", field.name, err)
                raise
        logger.debug("decoded %d fields from %d bytes", len(self._fields), reader.off())
        return values, reader.off()

    def to_bytes(self, values: Mapping[Hashable, Any]) -> bytes:
        """Encode values into a new bytes object of exactly the record size.

        Unlike encode(), nothing is returned unless every field succeeds.
        """
        # Import here to avoid circular dependency
        from ..utils.sizing import encoded_size

        scratch = bytearray(encoded_size(self, values))
        written = self.encode(values, scratch)
        return bytes(scratch[:written])

    def from_bytes(self, data: BytesLike, strict: bool = False) -> Dict[Hashable, ValueInfo]:
        """Decode a record and return only the values mapping.

        Args:
            data: Source bytes
            strict: Require the record to span all of data

        Raises:
            TrailingData: In strict mode, if bytes remain after the last field
        """
        values: Dict[Hashable, ValueInfo] = {}
        _, consumed = self.decode(data, values)
        if strict and consumed != len(data):
            raise TrailingData(None, consumed, f"{len(data) - consumed} trailing bytes")
        return values
