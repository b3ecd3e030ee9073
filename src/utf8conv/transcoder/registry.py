"""Transcoder registry and backend resolution."""
from __future__ import annotations

from typing import Callable, Dict, Iterator, Mapping

import structlog

from .base import Transcoder
from .builtin import CodecsTranscoder
from .pure import PureTranscoder
from .win32 import Win32Transcoder

AUTO = "auto"

logger = structlog.get_logger(__name__)


class TranscoderRegistry:
    """Runtime registry for built-in and user provided transcoder backends."""

    def __init__(self) -> None:
        self._factories: Dict[str, type[Transcoder] | Callable[[], Transcoder]] = {}

    def register(
        self,
        name: str,
        factory: type[Transcoder] | Callable[[], Transcoder],
        override: bool = False,
    ) -> None:
        if name == AUTO:
            raise ValueError(f"'{AUTO}' is reserved for backend resolution")
        if not override and name in self._factories:
            raise ValueError(f"Transcoder already registered: {name}")
        self._factories[name] = factory

    def unregister(self, name: str) -> None:
        self._factories.pop(name, None)

    def get(self, name: str) -> type[Transcoder] | Callable[[], Transcoder]:
        try:
            return self._factories[name]
        except KeyError as exc:
            raise KeyError(f"Unknown transcoder: {name}") from exc

    def all(self) -> Mapping[str, type[Transcoder] | Callable[[], Transcoder]]:
        return dict(self._factories)

    def iter_available(self) -> Iterator[str]:
        for name, factory in self._factories.items():
            available = getattr(factory, "available", None)
            if available is None or available():
                yield name

    def create(self, name: str = AUTO) -> Transcoder:
        selected = self._auto_name() if name == AUTO else name
        factory = self.get(selected)
        available = getattr(factory, "available", None)
        if available is not None and not available():
            raise ValueError(f"Transcoder '{selected}' is not available on this platform")
        transcoder = factory()
        logger.debug("transcoder.resolved", requested=name, backend=selected)
        return transcoder

    def _auto_name(self) -> str:
        available = set(self.iter_available())
        for candidate in (Win32Transcoder.name, CodecsTranscoder.name, PureTranscoder.name):
            if candidate in available:
                return candidate
        raise KeyError("No transcoder backend is available")


def load_builtin_transcoders(registry: TranscoderRegistry) -> None:
    for factory in (Win32Transcoder, CodecsTranscoder, PureTranscoder):
        registry.register(factory.name, factory, override=True)


_DEFAULT_REGISTRY = TranscoderRegistry()
load_builtin_transcoders(_DEFAULT_REGISTRY)


def default_registry() -> TranscoderRegistry:
    return _DEFAULT_REGISTRY


def resolve_transcoder(name: str = AUTO, *, registry: TranscoderRegistry | None = None) -> Transcoder:
    return (registry or _DEFAULT_REGISTRY).create(name)


__all__ = [
    "AUTO",
    "TranscoderRegistry",
    "default_registry",
    "load_builtin_transcoders",
    "resolve_transcoder",
]
