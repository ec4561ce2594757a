"""
Log record sanitizing.

SanitizingFilter rewrites error records before any handler formats them:
exceptions go through sanitize_error(), every other argument (a lone mapping
argument included) through summarize_value(), and an over-long message is
bounded like any other string.

install_log_sanitizer() applies the filter process-wide through the log record
factory, so loggers and handlers created later (uvicorn's non-propagating
loggers, for one) are covered without touching call sites.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from .errors import is_error_like, sanitize_error
from .summarize import MAX_STRING_LENGTH, summarize_value

_logger = logging.getLogger("safe_log.filters")

_installed: Optional["SanitizingFilter"] = None
_previous_factory: Optional[Callable[..., logging.LogRecord]] = None


# PUBLIC_INTERFACE
def sanitize_log_arg(value: Any) -> Any:
    """Sanitize one logging argument (errors via sanitize_error, others summarized)."""
    if is_error_like(value):
        return sanitize_error(value)
    return summarize_value(value)


def _safe(value: Any) -> Any:
    try:
        return sanitize_log_arg(value)
    except Exception:
        return f"[Unloggable {type(value).__name__}]"


# PUBLIC_INTERFACE
class SanitizingFilter(logging.Filter):
    """Bound the msg and args of records at or above level."""

    def __init__(self, level: int = logging.ERROR, name: str = ""):
        super().__init__(name)
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno < self.level:
            return True
        if not isinstance(record.msg, str):
            record.msg = _safe(record.msg)
        if isinstance(record.args, Mapping):
            # logging unpacks a single mapping argument into record.args
            args = _safe(record.args)
            record.args = args if isinstance(args, Mapping) else {}
        elif record.args:
            record.args = tuple(_safe(arg) for arg in record.args)
        if isinstance(record.msg, str) and len(record.msg) > MAX_STRING_LENGTH:
            try:
                message = record.getMessage()
            except (TypeError, ValueError, KeyError):
                message = record.msg
            record.msg = summarize_value(message)
            record.args = ()
        return True


# PUBLIC_INTERFACE
def install_log_sanitizer(level: int = logging.ERROR) -> SanitizingFilter:
    """Sanitize every log record created from now on, process-wide.

    Wraps the current log record factory. A second call only updates the
    threshold of the filter already installed. Returns the active filter.
    """
    global _installed, _previous_factory
    if _installed is not None:
        _installed.level = level
        return _installed

    sanitizer = SanitizingFilter(level=level)
    previous = logging.getLogRecordFactory()

    def factory(*args, **kwargs) -> logging.LogRecord:
        record = previous(*args, **kwargs)
        sanitizer.filter(record)
        return record

    logging.setLogRecordFactory(factory)
    _installed, _previous_factory = sanitizer, previous
    _logger.debug("Log sanitizer installed at level %s", logging.getLevelName(level))
    return sanitizer


# PUBLIC_INTERFACE
def uninstall_log_sanitizer() -> None:
    """Restore the log record factory that was active before install_log_sanitizer()."""
    global _installed, _previous_factory
    if _installed is None:
        return
    logging.setLogRecordFactory(_previous_factory or logging.LogRecord)
    _installed, _previous_factory = None, None
