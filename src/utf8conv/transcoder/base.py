"""Transcoder capability shared by all backends."""
from __future__ import annotations

from array import array

from ..models import SourceView


class TranscodeError(Exception):
    """Failure reported by a transcoding primitive, with its system error code."""

    def __init__(self, code: int, detail: str | None = None) -> None:
        super().__init__(detail or f"transcoding failed with error {code}")
        self.code = code
        self.detail = detail


class Transcoder:
    """Protocol-like base class for strict measure-then-fill transcoders.

    ``measure_*`` returns the exact destination length for ``source``;
    ``fill_*`` writes into a caller-allocated ``dest`` and returns the number
    of code units written. Both reject ill-formed input by raising
    :class:`TranscodeError` and never substitute replacement characters.
    """

    name: str

    @classmethod
    def available(cls) -> bool:
        return True

    def measure_utf16(self, source: SourceView) -> int:  # pragma: no cover - protocol
        raise NotImplementedError

    def fill_utf16(self, source: SourceView, dest: array) -> int:  # pragma: no cover - protocol
        raise NotImplementedError

    def measure_utf8(self, source: SourceView) -> int:  # pragma: no cover - protocol
        raise NotImplementedError

    def fill_utf8(self, source: SourceView, dest: bytearray) -> int:  # pragma: no cover - protocol
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


__all__ = ["TranscodeError", "Transcoder"]
