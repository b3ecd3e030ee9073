"""Normalization of the accepted input forms into ``SourceView`` ranges."""
from __future__ import annotations

from typing import Any, Callable, Sequence

from .models import Encoding, SourceView
from .utils.text import as_utf8_units, as_utf16_units

_COERCERS: dict[Encoding, Callable[[Any], Sequence[int]]] = {
    Encoding.UTF8: as_utf8_units,
    Encoding.UTF16: as_utf16_units,
}


def view_over(
    data: Any,
    encoding: Encoding,
    start: int | None = None,
    finish: int | None = None,
) -> SourceView:
    """Build the explicit ``[start, finish)`` range form.

    Omitted bounds default to the whole container, which is how the
    owned-container form is expressed in terms of the range form.
    """

    if isinstance(data, SourceView):
        if start is not None or finish is not None:
            raise TypeError("Bounds cannot be combined with an existing SourceView")
        if data.encoding is not encoding:
            raise TypeError(f"Expected a {encoding.value} view, got {data.encoding.value}")
        return data
    units = _COERCERS[encoding](data)
    lower = 0 if start is None else start
    upper = len(units) if finish is None else finish
    return SourceView(units, lower, upper, encoding)


def view_terminated(data: Any, encoding: Encoding, start: int = 0) -> SourceView:
    """Build a view that ends at the first NUL code unit at or after ``start``."""

    units = _COERCERS[encoding](data)
    return SourceView(units, start, _find_terminator(units, start), encoding)


def utf8_view(data: Any, start: int | None = None, finish: int | None = None) -> SourceView:
    return view_over(data, Encoding.UTF8, start, finish)


def utf16_view(data: Any, start: int | None = None, finish: int | None = None) -> SourceView:
    return view_over(data, Encoding.UTF16, start, finish)


def terminated_utf8(data: Any, start: int = 0) -> SourceView:
    return view_terminated(data, Encoding.UTF8, start)


def terminated_utf16(data: Any, start: int = 0) -> SourceView:
    return view_terminated(data, Encoding.UTF16, start)


def _find_terminator(units: Sequence[int], start: int) -> int:
    if start < 0 or start > len(units):
        raise ValueError(f"Start {start} is outside the data ({len(units)})")
    finder = getattr(units, "index", None)
    if finder is not None:
        try:
            return finder(0, start)
        except ValueError:
            pass
    else:
        for position in range(start, len(units)):
            if units[position] == 0:
                return position
    raise ValueError("Missing NUL terminator in source data")


__all__ = [
    "view_over",
    "view_terminated",
    "utf8_view",
    "utf16_view",
    "terminated_utf8",
    "terminated_utf16",
]
