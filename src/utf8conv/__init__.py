"""Strict UTF-8 <-> UTF-16 conversion.

Both directions validate strictly: ill-formed input raises
:class:`ConversionFailed` instead of being replaced with U+FFFD.

Example:
    >>> from utf8conv import utf16_from_utf8, utf8_from_utf16
    >>> list(utf16_from_utf8(b"\\xe9\\x87\\x91"))
    [37329]
    >>> utf8_from_utf16([0x91D1])
    b'\\xe9\\x87\\x91'
"""

from .converter import Converter, ConverterConfig, utf8_from_utf16, utf16_from_utf8
from .errors import ConversionError, ConversionFailed, InputTooLarge
from .models import ByteOrder, Encoding, SourceView
from .views import terminated_utf8, terminated_utf16, utf8_view, utf16_view
from .version import __version__

__all__ = [
    "utf16_from_utf8",
    "utf8_from_utf16",
    "Converter",
    "ConverterConfig",
    "ConversionError",
    "ConversionFailed",
    "InputTooLarge",
    "ByteOrder",
    "Encoding",
    "SourceView",
    "terminated_utf8",
    "terminated_utf16",
    "utf8_view",
    "utf16_view",
    "__version__",
]
