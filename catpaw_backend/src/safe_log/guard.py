"""
Process-wide fault handlers.

FaultGuard installs sys.excepthook and threading.excepthook replacements and
handles asyncio failures nobody retrieved (the counterpart of an unhandled
promise rejection) in two places: as an explicit loop exception handler, and as
a filter on the "asyncio" logger so loops created by an external server, which
report through asyncio's default handler, follow the same policy.

Authorization failures, which background polling against remote providers
produces constantly, are reduced to a one-line notice; every other fault is
logged through sanitize_error(), without the raw traceback.

The handlers only log. An uncaught exception in the main thread still ends the
interpreter after sys.excepthook returns.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from typing import Any, Dict, Optional

from .errors import AUTH_STATUS, is_auth_error, sanitize_error
from .summarize import summarize_value

REJECTION_NOTICE = "Unauthorized request skipped"
EXCEPTION_NOTICE = "Unauthorized exception skipped"

ASYNCIO_LOGGER = "asyncio"


class _AsyncioFaultFilter(logging.Filter):
    """Rewrite asyncio default-handler records that carry an exception."""

    def filter(self, record: logging.LogRecord) -> bool:
        exc = record.exc_info[1] if record.exc_info else None
        if exc is None:
            return True
        if is_auth_error(exc):
            record.msg = "Unhandled rejection: %s (status %d)"
            record.args = (REJECTION_NOTICE, AUTH_STATUS)
            record.levelno, record.levelname = logging.WARNING, "WARNING"
        else:
            lines = str(record.msg).splitlines() or ["asyncio"]
            record.msg = "Unhandled rejection [%s]: %s"
            record.args = (summarize_value(lines[0]), sanitize_error(exc))
        record.exc_info = None
        record.exc_text = None
        return True


# PUBLIC_INTERFACE
class FaultGuard:
    """Install/uninstall the process-wide exception hooks with auth-aware logging."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("safe_log.guard")
        self._previous_excepthook = None
        self._previous_threading_hook = None
        self._asyncio_filter = _AsyncioFaultFilter()
        self.installed = False

    # PUBLIC_INTERFACE
    def handle_rejection(self, loop: Optional[asyncio.AbstractEventLoop], context: Dict[str, Any]) -> None:
        """asyncio loop exception handler: log the failure unless it is an auth error."""
        reason = context.get("exception")
        if is_auth_error(reason):
            self.logger.warning("Unhandled rejection: %s (status %d)", REJECTION_NOTICE, AUTH_STATUS)
            return
        if reason is None:
            self.logger.error("Unhandled rejection [asyncio]: %s", context.get("message", "unknown failure"))
            return
        self.logger.error("Unhandled rejection [%s]: %s", type(reason).__name__, sanitize_error(reason))

    # PUBLIC_INTERFACE
    def handle_exception(self, exc_type, exc, tb) -> None:
        """sys.excepthook replacement: log the uncaught exception unless it is an auth error."""
        if issubclass(exc_type, KeyboardInterrupt):
            hook = self._previous_excepthook or sys.__excepthook__
            hook(exc_type, exc, tb)
            return
        if is_auth_error(exc):
            self.logger.warning("Uncaught exception: %s (status %d)", EXCEPTION_NOTICE, AUTH_STATUS)
            return
        self.logger.error("Uncaught exception [%s]: %s", exc_type.__name__, sanitize_error(exc))

    # PUBLIC_INTERFACE
    def handle_thread_exception(self, args: threading.ExceptHookArgs) -> None:
        """threading.excepthook replacement with the same policy as handle_exception."""
        if args.exc_type is SystemExit:
            return
        self.handle_exception(args.exc_type, args.exc_value, args.exc_traceback)

    # PUBLIC_INTERFACE
    def install(self) -> "FaultGuard":
        """Replace the exception hooks and filter the asyncio logger. Idempotent."""
        if self.installed:
            return self
        self._previous_excepthook = sys.excepthook
        self._previous_threading_hook = threading.excepthook
        sys.excepthook = self.handle_exception
        threading.excepthook = self.handle_thread_exception
        logging.getLogger(ASYNCIO_LOGGER).addFilter(self._asyncio_filter)
        self.installed = True
        self.logger.debug("Fault guard installed")
        return self

    # PUBLIC_INTERFACE
    def uninstall(self) -> None:
        """Restore the hooks that were active before install()."""
        if not self.installed:
            return
        sys.excepthook = self._previous_excepthook or sys.__excepthook__
        threading.excepthook = self._previous_threading_hook or threading.__excepthook__
        logging.getLogger(ASYNCIO_LOGGER).removeFilter(self._asyncio_filter)
        self.installed = False

    # PUBLIC_INTERFACE
    def install_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Attach handle_rejection as the exception handler of an event loop."""
        loop.set_exception_handler(self.handle_rejection)
