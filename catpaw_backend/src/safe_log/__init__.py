"""
Safe logging toolkit: bounded value summaries, error sanitizing, the log
record filter that applies them, and the process-wide fault guard.
"""

from .errors import http_status, is_auth_error, is_error_like, sanitize_error  # noqa: F401
from .filters import SanitizingFilter, install_log_sanitizer, sanitize_log_arg, uninstall_log_sanitizer  # noqa: F401
from .guard import FaultGuard  # noqa: F401
from .summarize import summarize_value  # noqa: F401

__all__ = [
    "FaultGuard",
    "SanitizingFilter",
    "http_status",
    "install_log_sanitizer",
    "is_auth_error",
    "is_error_like",
    "sanitize_error",
    "sanitize_log_arg",
    "summarize_value",
    "uninstall_log_sanitizer",
]
