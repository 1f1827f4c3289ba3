"""Declarative block definitions for blockcodec.

This module provides Pydantic models describing block layouts as JSON
documents, and loaders that turn them into Block instances.
"""

from __future__ import annotations

from .definition import BlockDefinition, FieldDefinition, load_block, load_block_definition

__all__ = [
    "BlockDefinition",
    "FieldDefinition",
    "load_block",
    "load_block_definition",
]
