"""Self-contained strict transcoder following the Unicode well-formedness table."""
from __future__ import annotations

from array import array
from typing import Iterator, Sequence

from ..errors import ERROR_INSUFFICIENT_BUFFER, ERROR_INVALID_PARAMETER, ERROR_NO_UNICODE_TRANSLATION
from ..models import SourceView
from .base import TranscodeError, Transcoder

_CONT_MASK = 0x3F
_CONT_LEAD = 0x80

# lead byte range -> (continuation count, first continuation bounds, payload mask)
_LEAD_TABLE: tuple[tuple[int, int, int, int, int, int], ...] = (
    (0xC2, 0xDF, 1, 0x80, 0xBF, 0x1F),
    (0xE0, 0xE0, 2, 0xA0, 0xBF, 0x0F),
    (0xE1, 0xEC, 2, 0x80, 0xBF, 0x0F),
    (0xED, 0xED, 2, 0x80, 0x9F, 0x0F),
    (0xEE, 0xEF, 2, 0x80, 0xBF, 0x0F),
    (0xF0, 0xF0, 3, 0x90, 0xBF, 0x07),
    (0xF1, 0xF3, 3, 0x80, 0xBF, 0x07),
    (0xF4, 0xF4, 3, 0x80, 0x8F, 0x07),
)


def _lead_rule(lead: int) -> tuple[int, int, int, int] | None:
    for low, high, needed, lower, upper, mask in _LEAD_TABLE:
        if low <= lead <= high:
            return needed, lower, upper, mask
    return None


def _ill_formed(detail: str) -> TranscodeError:
    return TranscodeError(ERROR_NO_UNICODE_TRANSLATION, detail)


def iter_utf8_scalars(units: Sequence[int]) -> Iterator[int]:
    """Yield the scalar values of well-formed UTF-8, raising on the first bad byte."""
    length = len(units)
    index = 0
    while index < length:
        lead = units[index]
        if lead < 0x80:
            yield lead
            index += 1
            continue
        rule = _lead_rule(lead)
        if rule is None:
            raise _ill_formed(f"invalid start byte 0x{lead:02X} at offset {index}")
        needed, lower, upper, mask = rule
        if index + needed >= length:
            raise _ill_formed(f"truncated sequence at offset {index}")
        scalar = lead & mask
        for step in range(1, needed + 1):
            unit = units[index + step]
            low, high = (lower, upper) if step == 1 else (0x80, 0xBF)
            if not low <= unit <= high:
                raise _ill_formed(f"invalid continuation byte 0x{unit:02X} at offset {index + step}")
            scalar = (scalar << 6) | (unit & _CONT_MASK)
        yield scalar
        index += needed + 1


def _code_unit(units: Sequence[int], index: int) -> int:
    unit = units[index]
    if not isinstance(unit, int):
        raise TranscodeError(ERROR_INVALID_PARAMETER, f"code unit {unit!r} is not an integer at index {index}")
    if not 0 <= unit <= 0xFFFF:
        raise TranscodeError(ERROR_INVALID_PARAMETER, f"code unit {unit} out of range at index {index}")
    return unit


def iter_utf16_scalars(units: Sequence[int]) -> Iterator[int]:
    """Yield the scalar values of well-formed UTF-16, pairing surrogates."""
    length = len(units)
    index = 0
    while index < length:
        unit = _code_unit(units, index)
        if 0xD800 <= unit <= 0xDBFF:
            trail = _code_unit(units, index + 1) if index + 1 < length else None
            if trail is None or not 0xDC00 <= trail <= 0xDFFF:
                raise _ill_formed(f"unpaired high surrogate 0x{unit:04X} at index {index}")
            yield 0x10000 + ((unit - 0xD800) << 10) + (trail - 0xDC00)
            index += 2
            continue
        if 0xDC00 <= unit <= 0xDFFF:
            raise _ill_formed(f"unpaired low surrogate 0x{unit:04X} at index {index}")
        yield unit
        index += 1


def utf8_width(scalar: int) -> int:
    if scalar < 0x80:
        return 1
    if scalar < 0x800:
        return 2
    if scalar < 0x10000:
        return 3
    return 4


def encode_utf8_scalar(scalar: int) -> bytes:
    width = utf8_width(scalar)
    if width == 1:
        return bytes((scalar,))
    if width == 2:
        return bytes((0xC0 | (scalar >> 6), _CONT_LEAD | (scalar & _CONT_MASK)))
    if width == 3:
        return bytes(
            (
                0xE0 | (scalar >> 12),
                _CONT_LEAD | ((scalar >> 6) & _CONT_MASK),
                _CONT_LEAD | (scalar & _CONT_MASK),
            )
        )
    return bytes(
        (
            0xF0 | (scalar >> 18),
            _CONT_LEAD | ((scalar >> 12) & _CONT_MASK),
            _CONT_LEAD | ((scalar >> 6) & _CONT_MASK),
            _CONT_LEAD | (scalar & _CONT_MASK),
        )
    )


class PureTranscoder(Transcoder):
    """Table-driven strict transcoder with no platform dependency."""

    name = "pure"

    def measure_utf16(self, source: SourceView) -> int:
        return sum(2 if scalar > 0xFFFF else 1 for scalar in iter_utf8_scalars(source.units()))

    def fill_utf16(self, source: SourceView, dest: array) -> int:
        capacity = len(dest)
        written = 0
        for scalar in iter_utf8_scalars(source.units()):
            if scalar > 0xFFFF:
                if written + 2 > capacity:
                    raise TranscodeError(ERROR_INSUFFICIENT_BUFFER, "destination buffer too small")
                scalar -= 0x10000
                dest[written] = 0xD800 | (scalar >> 10)
                dest[written + 1] = 0xDC00 | (scalar & 0x3FF)
                written += 2
            else:
                if written + 1 > capacity:
                    raise TranscodeError(ERROR_INSUFFICIENT_BUFFER, "destination buffer too small")
                dest[written] = scalar
                written += 1
        return written

    def measure_utf8(self, source: SourceView) -> int:
        units = source.units()
        # a value that is not a code unit outranks any pairing error after it
        for index in range(len(units)):
            _code_unit(units, index)
        return sum(utf8_width(scalar) for scalar in iter_utf16_scalars(units))

    def fill_utf8(self, source: SourceView, dest: bytearray) -> int:
        capacity = len(dest)
        written = 0
        for scalar in iter_utf16_scalars(source.units()):
            encoded = encode_utf8_scalar(scalar)
            end = written + len(encoded)
            if end > capacity:
                raise TranscodeError(ERROR_INSUFFICIENT_BUFFER, "destination buffer too small")
            dest[written:end] = encoded
            written = end
        return written


__all__ = ["PureTranscoder", "iter_utf8_scalars", "iter_utf16_scalars", "utf8_width", "encode_utf8_scalar"]
