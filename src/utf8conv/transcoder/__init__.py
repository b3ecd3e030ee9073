"""Transcoder package exports."""
from .base import TranscodeError, Transcoder
from .builtin import CodecsTranscoder
from .pure import PureTranscoder
from .registry import AUTO, TranscoderRegistry, default_registry, resolve_transcoder
from .win32 import Win32Transcoder

__all__ = [
    "AUTO",
    "TranscodeError",
    "Transcoder",
    "CodecsTranscoder",
    "PureTranscoder",
    "Win32Transcoder",
    "TranscoderRegistry",
    "default_registry",
    "resolve_transcoder",
]
