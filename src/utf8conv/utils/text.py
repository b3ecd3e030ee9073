"""Code-unit coercion helpers shared across modules."""
from __future__ import annotations

import sys
from array import array
from typing import Any, Sequence

from ..models import ByteOrder

UTF16_TYPECODE = "H"


def new_utf16_buffer(length: int = 0) -> array:
    return array(UTF16_TYPECODE, bytes(2 * length))


def as_utf8_units(data: Any) -> Sequence[int]:
    """Return a sequence of UTF-8 bytes for an owned container."""
    if isinstance(data, (bytes, bytearray)):
        return data
    if isinstance(data, memoryview):
        if data.itemsize != 1:
            raise TypeError(f"UTF-8 memoryview must have 1-byte items, got format {data.format!r}")
        return data.cast("B") if data.format != "B" else data
    if isinstance(data, array):
        if data.typecode != "B":
            raise TypeError(f"UTF-8 array must use typecode 'B', got {data.typecode!r}")
        return data
    if isinstance(data, str):
        raise TypeError("UTF-8 source must be bytes-like, not str")
    raise TypeError(f"Unsupported UTF-8 source type: {type(data).__name__}")


def as_utf16_units(data: Any) -> Sequence[int]:
    """Return a sequence of UTF-16 code units for an owned container.

    ``str`` is expanded to its UTF-16 code units with lone surrogates kept as
    they are, so the transcoder gets to reject them.
    """
    if isinstance(data, str):
        return units_from_bytes(data.encode("utf-16-le", errors="surrogatepass"), ByteOrder.LITTLE)
    if isinstance(data, array):
        if data.typecode != UTF16_TYPECODE:
            raise TypeError(f"UTF-16 array must use typecode 'H', got {data.typecode!r}")
        return data
    if isinstance(data, memoryview):
        if data.format != UTF16_TYPECODE:
            raise TypeError(f"UTF-16 memoryview must have format 'H', got {data.format!r}")
        return data
    if isinstance(data, (bytes, bytearray)):
        raise TypeError("UTF-16 source must be code units, not bytes; use units_from_bytes()")
    if isinstance(data, (list, tuple)):
        return data
    raise TypeError(f"Unsupported UTF-16 source type: {type(data).__name__}")


def units_from_bytes(data: bytes, byte_order: ByteOrder | str) -> array:
    """Split serialized UTF-16 into code units of the given byte order."""
    if len(data) % 2:
        raise ValueError(f"UTF-16 data must have an even byte count, got {len(data)}")
    units = array(UTF16_TYPECODE)
    units.frombytes(data)
    if ByteOrder(byte_order).value != sys.byteorder:
        units.byteswap()
    return units


def units_to_bytes(units: Sequence[int], byte_order: ByteOrder | str) -> bytes:
    buffer = array(UTF16_TYPECODE, units)
    if ByteOrder(byte_order).value != sys.byteorder:
        buffer.byteswap()
    return buffer.tobytes()


def utf16_len(text: str) -> int:
    """Length of ``text`` in UTF-16 code units."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


__all__ = [
    "UTF16_TYPECODE",
    "new_utf16_buffer",
    "as_utf8_units",
    "as_utf16_units",
    "units_from_bytes",
    "units_to_bytes",
    "utf16_len",
]
