"""Shared domain models used across utf8conv."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class Encoding(str, Enum):
    UTF8 = "utf-8"
    UTF16 = "utf-16"


class ByteOrder(str, Enum):
    LITTLE = "little"
    BIG = "big"


@dataclass(slots=True, frozen=True)
class SourceView:
    """Read-only half-open range ``[start, finish)`` over code units.

    ``data`` is any indexable sequence of integer code units: ``bytes`` or a
    byte ``memoryview`` for UTF-8, ``array("H")`` or a list of ints for
    UTF-16. The view never copies ``data``.
    """

    data: Sequence[int]
    start: int
    finish: int
    encoding: Encoding

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"View start must not be negative: {self.start}")
        if self.start > self.finish:
            raise ValueError(f"View start {self.start} is past finish {self.finish}")
        if self.finish > len(self.data):
            raise ValueError(f"View finish {self.finish} is past the end of the data ({len(self.data)})")

    @property
    def count(self) -> int:
        return self.finish - self.start

    def is_empty(self) -> bool:
        return self.finish == self.start

    def units(self) -> Sequence[int]:
        return self.data[self.start : self.finish]


@dataclass(slots=True)
class ValidationReport:
    encoding: Encoding
    valid: bool
    source_units: int
    destination_units: int | None = None
    code: int | None = None
    hresult: int | None = None
    message: str | None = None
