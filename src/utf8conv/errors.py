"""Exception hierarchy and system error codes for conversions."""
from __future__ import annotations

ERROR_INVALID_DATA = 13
ERROR_INVALID_PARAMETER = 87
ERROR_INSUFFICIENT_BUFFER = 122
ERROR_NO_UNICODE_TRANSLATION = 1113

_FACILITY_WIN32 = 7


def hresult_from_win32(code: int) -> int:
    """Map a Win32 error number onto its HRESULT, like ``HRESULT_FROM_WIN32``."""
    if code <= 0:
        return code & 0xFFFFFFFF
    return (code & 0x0000FFFF) | (_FACILITY_WIN32 << 16) | 0x80000000


class ConversionError(Exception):
    """Base exception for UTF-8 / UTF-16 conversion failures"""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    @property
    def hresult(self) -> int:
        return hresult_from_win32(self.code)

    def __str__(self) -> str:
        return f"{self.message} (hr=0x{self.hresult:08X})"


class InputTooLarge(ConversionError):
    """Raised when the source length does not fit the transcoder's signed counter"""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            f"Input too long: {count} code units exceed the limit of {limit}",
            ERROR_INVALID_PARAMETER,
        )
        self.count = count
        self.limit = limit


class ConversionFailed(ConversionError):
    """Raised when the transcoder rejects the input in either pass"""

    def __init__(self, direction: str, phase: str, code: int, detail: str | None = None) -> None:
        message = f"Error in attempting conversion from {direction}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, code)
        self.direction = direction
        self.phase = phase


__all__ = [
    "ERROR_INVALID_DATA",
    "ERROR_INVALID_PARAMETER",
    "ERROR_INSUFFICIENT_BUFFER",
    "ERROR_NO_UNICODE_TRANSLATION",
    "hresult_from_win32",
    "ConversionError",
    "InputTooLarge",
    "ConversionFailed",
]
