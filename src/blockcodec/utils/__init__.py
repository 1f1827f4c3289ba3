"""Utility functions for blockcodec.

This module provides size calculation helpers.
"""

from __future__ import annotations

from .sizing import (
    encoded_size,
    field_size,
    field_sizes,
    max_field_size,
    min_encoded_size,
    varint_size,
)

__all__ = [
    "encoded_size",
    "field_size",
    "field_sizes",
    "max_field_size",
    "min_encoded_size",
    "varint_size",
]
