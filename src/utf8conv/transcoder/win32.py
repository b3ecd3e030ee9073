"""Transcoder calling the Win32 ``MultiByteToWideChar``/``WideCharToMultiByte`` APIs."""
from __future__ import annotations

import ctypes
import sys
from array import array
from typing import Any, Callable

from ..errors import ERROR_INVALID_DATA, ERROR_INVALID_PARAMETER
from ..models import SourceView
from ..utils.text import UTF16_TYPECODE
from ..utils.validation import MAX_TRANSFER_COUNT
from .base import TranscodeError, Transcoder

CP_UTF8 = 65001
MB_ERR_INVALID_CHARS = 0x00000008
WC_ERR_INVALID_CHARS = 0x00000080


def _checked_length(source: SourceView) -> int:
    # the APIs take a signed int count; anything larger would wrap negative
    if source.count > MAX_TRANSFER_COUNT:
        raise TranscodeError(ERROR_INVALID_PARAMETER, "source length does not fit into an int")
    return source.count


class Win32Transcoder(Transcoder):
    """Native Windows transcoder using ``CP_UTF8`` with strict error flags."""

    name = "native"

    def __init__(self) -> None:
        if not self.available():
            raise RuntimeError("The native transcoder requires Windows")
        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]

        self._multi_to_wide = kernel32.MultiByteToWideChar
        self._multi_to_wide.argtypes = [
            ctypes.c_uint,
            ctypes.c_uint32,
            ctypes.c_char_p,
            ctypes.c_int,
            ctypes.c_void_p,
            ctypes.c_int,
        ]
        self._multi_to_wide.restype = ctypes.c_int

        self._wide_to_multi = kernel32.WideCharToMultiByte
        self._wide_to_multi.argtypes = [
            ctypes.c_uint,
            ctypes.c_uint32,
            ctypes.c_void_p,
            ctypes.c_int,
            ctypes.c_void_p,
            ctypes.c_int,
            ctypes.c_void_p,
            ctypes.c_void_p,
        ]
        self._wide_to_multi.restype = ctypes.c_int

    @classmethod
    def available(cls) -> bool:
        return sys.platform == "win32"

    def measure_utf16(self, source: SourceView) -> int:
        data = bytes(source.units())
        return self._call(
            self._multi_to_wide, CP_UTF8, MB_ERR_INVALID_CHARS, data, _checked_length(source), None, 0
        )

    def fill_utf16(self, source: SourceView, dest: array) -> int:
        data = bytes(source.units())
        address, capacity = dest.buffer_info()
        return self._call(
            self._multi_to_wide, CP_UTF8, MB_ERR_INVALID_CHARS, data, _checked_length(source), address, capacity
        )

    def measure_utf8(self, source: SourceView) -> int:
        wide = self._wide_source(source)
        address, _ = wide.buffer_info()
        return self._call(
            self._wide_to_multi,
            CP_UTF8,
            WC_ERR_INVALID_CHARS,
            address,
            _checked_length(source),
            None,
            0,
            None,
            None,
        )

    def fill_utf8(self, source: SourceView, dest: bytearray) -> int:
        wide = self._wide_source(source)
        address, _ = wide.buffer_info()
        target = (ctypes.c_char * len(dest)).from_buffer(dest)
        return self._call(
            self._wide_to_multi,
            CP_UTF8,
            WC_ERR_INVALID_CHARS,
            address,
            _checked_length(source),
            ctypes.addressof(target),
            len(dest),
            None,
            None,
        )

    @staticmethod
    def _wide_source(source: SourceView) -> array:
        try:
            return array(UTF16_TYPECODE, source.units())
        except (OverflowError, TypeError) as exc:
            raise TranscodeError(ERROR_INVALID_PARAMETER, f"invalid UTF-16 code unit: {exc}") from exc

    @staticmethod
    def _call(function: Callable[..., int], *args: Any) -> int:
        ctypes.set_last_error(0)
        result = function(*args)
        if result == 0:
            raise TranscodeError(ctypes.get_last_error() or ERROR_INVALID_DATA)
        return result


__all__ = ["Win32Transcoder", "CP_UTF8", "MB_ERR_INVALID_CHARS", "WC_ERR_INVALID_CHARS"]
