"""Built-in conversion checks runnable from the command line."""
from __future__ import annotations

from array import array
from dataclasses import dataclass, field
from typing import Callable, List

from .converter import Converter
from .errors import ERROR_NO_UNICODE_TRANSLATION, ConversionError, ConversionFailed, InputTooLarge
from .models import Encoding, SourceView
from .utils.validation import MAX_TRANSFER_COUNT
from .views import terminated_utf8, terminated_utf16


class _LengthProbe:
    """Sequence that reports a length without holding any data."""

    def __init__(self, length: int) -> None:
        self._length = length

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index):
        raise RuntimeError("oversized input was read before the length check")


@dataclass(slots=True)
class SelftestResult:
    name: str
    errors: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors


def _basic_round_trips(converter: Converter, errors: List[str]) -> None:
    utf16 = "Hello world"
    if list(converter.utf16_from_utf8(converter.utf8_from_utf16(utf16))) != [ord(char) for char in utf16]:
        errors.append("Converting from UTF-16 to UTF-8 and back gives different string.")
    utf8 = b"Ciao ciao"
    if converter.utf8_from_utf16(converter.utf16_from_utf8(utf8)) != utf8:
        errors.append("Converting from UTF-8 to UTF-16 and back gives different string.")


def _terminated_round_trips(converter: Converter, errors: List[str]) -> None:
    utf16 = array("H", map(ord, "Hello world\0"))
    back = converter.utf16_from_utf8(converter.utf8_from_utf16(terminated_utf16(utf16)))
    if list(back) != list(utf16[:-1]):
        errors.append("Converting terminated data from UTF-16 to UTF-8 and back gives different string.")
    utf8 = b"Ciao ciao\0"
    if converter.utf8_from_utf16(converter.utf16_from_utf8(terminated_utf8(utf8))) != utf8[:-1]:
        errors.append("Converting terminated data from UTF-8 to UTF-16 and back gives different string.")


def _empty_inputs(converter: Converter, errors: List[str]) -> None:
    if converter.utf8_from_utf16(""):
        errors.append("Empty UTF-16 string is not converted to an empty UTF-8.")
    if len(converter.utf16_from_utf8(b"")):
        errors.append("Empty UTF-8 string is not converted to an empty UTF-16.")
    if converter.utf8_from_utf16(terminated_utf16([0])):
        errors.append("Empty terminated UTF-16 data is not converted to an empty UTF-8.")
    if len(converter.utf16_from_utf8(terminated_utf8(b"\0"))):
        errors.append("Empty terminated UTF-8 data is not converted to an empty UTF-16.")


def _japanese_kin(converter: Converter, errors: List[str]) -> None:
    kin_utf8 = b"\xE9\x87\x91"
    kin_utf16 = [0x91D1]
    if list(converter.utf16_from_utf8(kin_utf8)) != kin_utf16:
        errors.append("Converting Japanese 'kin' from UTF-8 to UTF-16 failed.")
    if converter.utf8_from_utf16(kin_utf16) != kin_utf8:
        errors.append("Converting Japanese 'kin' from UTF-16 to UTF-8 failed.")


def _invalid_sequences(converter: Converter, errors: List[str]) -> None:
    cases: list[tuple[str, Callable[[], object]]] = [
        ("UTF-8", lambda: converter.utf16_from_utf8(b"Invalid UTF-8 follows: \xC0\x76\x77")),
        ("UTF-16", lambda: converter.utf8_from_utf16("Invalid UTF-16: \ud800\u0100")),
    ]
    for label, call in cases:
        try:
            call()
        except ConversionFailed as exc:
            if exc.code != ERROR_NO_UNICODE_TRANSLATION:
                errors.append(f"Error code for invalid {label} different than ERROR_NO_UNICODE_TRANSLATION.")
        else:
            errors.append(f"ConversionFailed not raised in presence of invalid {label}.")


def _gigantic_inputs(converter: Converter, errors: List[str]) -> None:
    length = MAX_TRANSFER_COUNT + 1
    for encoding, call in (
        (Encoding.UTF8, converter.utf16_from_utf8),
        (Encoding.UTF16, converter.utf8_from_utf16),
    ):
        try:
            call(SourceView(_LengthProbe(length), 0, length, encoding))
        except InputTooLarge:
            continue
        except RuntimeError as exc:
            errors.append(f"{encoding.value} input: {exc}.")
            continue
        errors.append(f"InputTooLarge not raised for {encoding.value} input whose length can't fit into an int.")


SELFTESTS: tuple[tuple[str, Callable[[Converter, List[str]], None]], ...] = (
    ("basic round trips", _basic_round_trips),
    ("terminated round trips", _terminated_round_trips),
    ("empty inputs", _empty_inputs),
    ("japanese kin", _japanese_kin),
    ("invalid sequences", _invalid_sequences),
    ("gigantic inputs", _gigantic_inputs),
)


def run_selftest(converter: Converter) -> List[SelftestResult]:
    results: List[SelftestResult] = []
    for name, check in SELFTESTS:
        result = SelftestResult(name)
        try:
            check(converter, result.errors)
        except ConversionError as exc:
            result.errors.append(f"Unexpected {type(exc).__name__}: {exc}")
        results.append(result)
    return results


__all__ = ["SelftestResult", "SELFTESTS", "run_selftest"]
