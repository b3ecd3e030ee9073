"""Utility exports."""
from .text import (
    as_utf8_units,
    as_utf16_units,
    new_utf16_buffer,
    units_from_bytes,
    units_to_bytes,
    utf16_len,
)
from .validation import MAX_TRANSFER_COUNT, ensure_transfer_count

__all__ = [
    "as_utf8_units",
    "as_utf16_units",
    "new_utf16_buffer",
    "units_from_bytes",
    "units_to_bytes",
    "utf16_len",
    "MAX_TRANSFER_COUNT",
    "ensure_transfer_count",
]
