"""Transcoder backed by the interpreter's strict UTF codecs."""
from __future__ import annotations

import codecs
import sys
from array import array

from ..errors import ERROR_INSUFFICIENT_BUFFER, ERROR_INVALID_PARAMETER, ERROR_NO_UNICODE_TRANSLATION
from ..models import ByteOrder, SourceView
from ..utils.text import UTF16_TYPECODE, units_from_bytes, utf16_len
from .base import TranscodeError, Transcoder

_NATIVE_UTF16_DECODE = codecs.utf_16_le_decode if sys.byteorder == "little" else codecs.utf_16_be_decode


def _decode_utf8(source: SourceView) -> str:
    try:
        text, _consumed = codecs.utf_8_decode(bytes(source.units()), "strict", True)
    except UnicodeDecodeError as exc:
        raise TranscodeError(
            ERROR_NO_UNICODE_TRANSLATION, f"{exc.reason} at offset {source.start + exc.start}"
        ) from exc
    return text


def _decode_utf16(source: SourceView) -> str:
    try:
        raw = array(UTF16_TYPECODE, source.units()).tobytes()
    except (OverflowError, TypeError) as exc:
        raise TranscodeError(ERROR_INVALID_PARAMETER, f"invalid UTF-16 code unit: {exc}") from exc
    try:
        text, _consumed = _NATIVE_UTF16_DECODE(raw, "strict", True)
    except UnicodeDecodeError as exc:
        raise TranscodeError(
            ERROR_NO_UNICODE_TRANSLATION, f"{exc.reason} at index {source.start + exc.start // 2}"
        ) from exc
    return text


class CodecsTranscoder(Transcoder):
    """Strict transcoder built on ``codecs.utf_8_decode`` and the UTF-16 codecs.

    The codecs have no measuring mode, so both passes decode the source; the
    sizing pass keeps only the length.
    """

    name = "codecs"

    def measure_utf16(self, source: SourceView) -> int:
        return utf16_len(_decode_utf8(source))

    def fill_utf16(self, source: SourceView, dest: array) -> int:
        units = units_from_bytes(_decode_utf8(source).encode("utf-16-le"), ByteOrder.LITTLE)
        if len(units) > len(dest):
            raise TranscodeError(ERROR_INSUFFICIENT_BUFFER, "destination buffer too small")
        dest[: len(units)] = units
        return len(units)

    def measure_utf8(self, source: SourceView) -> int:
        return len(_decode_utf16(source).encode("utf-8"))

    def fill_utf8(self, source: SourceView, dest: bytearray) -> int:
        encoded = _decode_utf16(source).encode("utf-8")
        if len(encoded) > len(dest):
            raise TranscodeError(ERROR_INSUFFICIENT_BUFFER, "destination buffer too small")
        dest[: len(encoded)] = encoded
        return len(encoded)


__all__ = ["CodecsTranscoder"]
