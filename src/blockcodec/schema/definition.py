"""Declarative block definitions.

A block layout can be described as a JSON document instead of code. The
document is validated with Pydantic and turned into a Block:

    {
        "name": "hello",
        "unique_names": true,
        "fields": [
            {"name": "magic", "kind": "fixed_bytes", "literal": "baadf00d"},
            {"name": "version", "kind": "varint", "fixed": 1},
            {"name": "counter", "kind": "varint"},
            {"name": "tag", "kind": "bytes", "length": 4},
            {"name": "payload", "kind": "bytes"}
        ]
    }

Field kinds:
    varint       free integer, or a constant when "fixed" is set
    bytes        exactly "length" bytes, or varint-prefixed when omitted
    fixed_bytes  constant "literal" (hex) emitted and validated verbatim
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..codec.block import Block
from ..codec.octets import MAX_VARINT
from ..codec.spec import Bytes, FieldSpec, FixedBytes, VarInt
from ..exceptions import SchemaError

FieldKind = Literal["varint", "bytes", "fixed_bytes"]


class FieldDefinition(BaseModel):
    """One field of a block definition document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    kind: FieldKind
    fixed: Optional[int] = Field(default=None, ge=0, le=MAX_VARINT)
    length: Optional[int] = Field(default=None, ge=0)
    literal: Optional[str] = None
    description: Optional[str] = None

    @field_validator("literal")
    @classmethod
    def _check_hex(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            bytes.fromhex(value)
        except ValueError as err:
            raise ValueError(f"literal must be a hex string, got {value!r}") from err
        return value

    @model_validator(mode="after")
    def _check_options(self) -> FieldDefinition:
        if self.fixed is not None and self.kind != "varint":
            raise ValueError(f"field {self.name}: 'fixed' only applies to varint fields")
        if self.length is not None and self.kind != "bytes":
            raise ValueError(f"field {self.name}: 'length' only applies to bytes fields")
        if self.kind == "fixed_bytes" and self.literal is None:
            raise ValueError(f"field {self.name}: fixed_bytes requires 'literal'")
        if self.literal is not None and self.kind != "fixed_bytes":
            raise ValueError(f"field {self.name}: 'literal' only applies to fixed_bytes fields")
        return self

    def to_spec(self) -> FieldSpec:
        """Return the FieldSpec this definition describes."""
        if self.kind == "varint":
            return VarInt(fixed=self.fixed)
        if self.kind == "bytes":
            return Bytes(length=self.length)
        return FixedBytes(bytes.fromhex(self.literal or ""))


class BlockDefinition(BaseModel):
    """A complete block definition document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Optional[str] = None
    unique_names: bool = False
    fields: List[FieldDefinition] = Field(default_factory=list)

    def build(self) -> Block:
        """Create the Block this definition describes.

        Raises:
            SchemaError: If a field name repeats and unique_names is set
        """
        block = Block(unique_names=self.unique_names)
        for field_def in self.fields:
            block.add_field(field_def.name, field_def.to_spec())
        return block

    @classmethod
    def parse(cls, document: Union[str, bytes, dict]) -> BlockDefinition:
        """Validate a definition given as JSON text or an already parsed dict.

        Raises:
            SchemaError: If the document is not a valid definition
        """
        try:
            if isinstance(document, dict):
                return cls.model_validate(document)
            return cls.model_validate_json(document)
        except ValidationError as err:
            raise SchemaError(f"Invalid block definition: {err}") from err


def load_block_definition(path: Union[str, Path]) -> BlockDefinition:
    """Load and validate a block definition from a JSON file.

    Args:
        path: Path to the JSON document

    Returns:
        Validated BlockDefinition

    Raises:
        SchemaError: If the document is not a valid definition
        OSError: If the file cannot be read
    """
    return BlockDefinition.parse(Path(path).read_text(encoding="utf-8"))


def load_block(path: Union[str, Path]) -> Block:
    """Load a block definition file and build its Block."""
    return load_block_definition(path).build()
