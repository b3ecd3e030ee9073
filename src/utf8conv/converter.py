"""Two-pass UTF-8 <-> UTF-16 conversion on top of a transcoder backend."""
from __future__ import annotations

from array import array
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable

import structlog

from .errors import ERROR_INVALID_DATA, ConversionFailed
from .models import SourceView
from .transcoder import AUTO, TranscodeError, Transcoder, resolve_transcoder
from .utils.text import new_utf16_buffer
from .utils.validation import MAX_TRANSFER_COUNT, ensure_transfer_count
from .views import utf8_view, utf16_view

UTF8_TO_UTF16 = "UTF-8 to UTF-16"
UTF16_TO_UTF8 = "UTF-16 to UTF-8"

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class ConverterConfig:
    backend: str = AUTO
    max_transfer_count: int = MAX_TRANSFER_COUNT


class Converter:
    """Strict converter following the measure-then-fill protocol.

    Every call normalizes its input to a :class:`SourceView`, returns early on
    empty input, checks the element count against the transcoder's signed
    32-bit limit, sizes the destination with a measuring pass and then fills
    exactly that many code units. Failures raise
    :class:`~utf8conv.errors.ConversionError` subclasses; nothing partial is
    ever returned.
    """

    def __init__(self, transcoder: Transcoder | None = None, config: ConverterConfig | None = None) -> None:
        self.config = config or ConverterConfig()
        self.transcoder = transcoder or resolve_transcoder(self.config.backend)

    @classmethod
    def from_config(cls, app_config: Any) -> "Converter":
        return cls(config=ConverterConfig(backend=app_config.transcoder.backend))

    def utf16_from_utf8(self, source: Any, start: int | None = None, finish: int | None = None) -> array:
        view = utf8_view(source, start, finish)
        if view.is_empty():
            return new_utf16_buffer()
        length = self._measure(UTF8_TO_UTF16, self.transcoder.measure_utf16, view)
        result = new_utf16_buffer(length)
        self._fill(UTF8_TO_UTF16, self.transcoder.fill_utf16, view, result, length)
        return result

    def utf8_from_utf16(self, source: Any, start: int | None = None, finish: int | None = None) -> bytes:
        view = utf16_view(source, start, finish)
        if view.is_empty():
            return b""
        length = self._measure(UTF16_TO_UTF8, self.transcoder.measure_utf8, view)
        result = bytearray(length)
        self._fill(UTF16_TO_UTF8, self.transcoder.fill_utf8, view, result, length)
        return bytes(result)

    def validate_utf8(self, source: Any, start: int | None = None, finish: int | None = None) -> int:
        """Run only the sizing pass and return the UTF-16 length."""
        view = utf8_view(source, start, finish)
        if view.is_empty():
            return 0
        return self._measure(UTF8_TO_UTF16, self.transcoder.measure_utf16, view)

    def validate_utf16(self, source: Any, start: int | None = None, finish: int | None = None) -> int:
        """Run only the sizing pass and return the UTF-8 length."""
        view = utf16_view(source, start, finish)
        if view.is_empty():
            return 0
        return self._measure(UTF16_TO_UTF8, self.transcoder.measure_utf8, view)

    def _measure(self, direction: str, primitive: Callable[[SourceView], int], view: SourceView) -> int:
        ensure_transfer_count(view.count, limit=self.config.max_transfer_count)
        return self._invoke(direction, "measure", primitive, view)

    def _fill(
        self,
        direction: str,
        primitive: Callable[[SourceView, Any], int],
        view: SourceView,
        dest: Any,
        expected: int,
    ) -> None:
        written = self._invoke(direction, "fill", primitive, view, dest)
        if written != expected:
            logger.debug("conversion.length_mismatch", direction=direction, expected=expected, written=written)
            raise ConversionFailed(
                direction, "fill", ERROR_INVALID_DATA, f"wrote {written} code units, expected {expected}"
            )

    def _invoke(self, direction: str, phase: str, primitive: Callable[..., int], *args: Any) -> int:
        try:
            count = primitive(*args)
        except TranscodeError as exc:
            logger.debug(
                "conversion.failed",
                direction=direction,
                phase=phase,
                backend=self.transcoder.name,
                code=exc.code,
                detail=exc.detail,
            )
            raise ConversionFailed(direction, phase, exc.code, exc.detail) from exc
        if count <= 0:
            logger.debug("conversion.failed", direction=direction, phase=phase, backend=self.transcoder.name)
            raise ConversionFailed(direction, phase, ERROR_INVALID_DATA, "transcoder produced no output")
        return count


@lru_cache(maxsize=1)
def default_converter() -> Converter:
    return Converter()


def utf16_from_utf8(
    source: Any,
    start: int | None = None,
    finish: int | None = None,
    *,
    converter: Converter | None = None,
) -> array:
    runner = converter or default_converter()
    return runner.utf16_from_utf8(source, start, finish)


def utf8_from_utf16(
    source: Any,
    start: int | None = None,
    finish: int | None = None,
    *,
    converter: Converter | None = None,
) -> bytes:
    runner = converter or default_converter()
    return runner.utf8_from_utf16(source, start, finish)


__all__ = [
    "UTF8_TO_UTF16",
    "UTF16_TO_UTF8",
    "Converter",
    "ConverterConfig",
    "default_converter",
    "utf16_from_utf8",
    "utf8_from_utf16",
]
