"""Structured logging setup for utf8conv."""
from __future__ import annotations

import logging
import sys
from typing import Dict

import structlog

from .errors import hresult_from_win32

_DEFAULT_LEVEL = "info"
_LEVELS: Dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(level: str | None = None) -> None:
    """Route structlog events to stderr as one JSON object per line.

    Records carry ``level``, ``ts``, ``msg`` and ``component``. Converters log
    their failures at debug level with the Win32 ``code``; those records also
    get the matching ``hresult`` so they line up with the CLI error output.
    Stdout is left to converted data and reports.
    """

    threshold = _LEVELS.get((level or _DEFAULT_LEVEL).lower(), logging.INFO)

    logging.basicConfig(
        level=threshold,
        handlers=[logging.StreamHandler(sys.stderr)],
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            _add_component,
            _event_as_msg,
            _add_hresult,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        cache_logger_on_first_use=True,
    )


def _add_component(
    logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    # module loggers are named after the module, e.g. utf8conv.converter
    event_dict.setdefault("component", getattr(logger, "name", None) or "utf8conv")
    return event_dict


def _event_as_msg(
    _logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    if "msg" not in event_dict:
        event_dict["msg"] = event_dict.pop("event", "")
    return event_dict


def _add_hresult(
    _logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    """Render a Win32 ``code`` field as its HRESULT as well."""

    code = event_dict.get("code")
    if isinstance(code, int) and "hresult" not in event_dict:
        event_dict["hresult"] = f"0x{hresult_from_win32(code):08X}"
    return event_dict


__all__ = ["configure_logging"]
