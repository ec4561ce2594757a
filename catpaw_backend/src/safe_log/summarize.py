"""
Bounded, cycle-safe value summaries for logging.

summarize_value() projects an arbitrary value into something safe to hand to a
log formatter:

- strings are capped at MAX_STRING_LENGTH characters,
- sequences keep their first MAX_ITEMS items plus a count marker,
- mappings and plain objects keep their first MAX_ITEMS entries,
- binary payloads are described by their byte length only,
- recursion stops at MAX_DEPTH and on any object already visited.

The result is always a fresh structure; inputs are never modified.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from itertools import islice
from types import ModuleType
from typing import Any, Optional, Set

MAX_DEPTH = 5
MAX_STRING_LENGTH = 2000
MAX_ITEMS = 20

MAX_DEPTH_MARKER = "[MaxDepth]"
CIRCULAR_MARKER = "[Circular]"
ELLIPSIS = "..."
MORE_KEYS_FIELD = "__more_keys__"

_BINARY_TYPES = (bytes, bytearray, memoryview)
_SEQUENCE_TYPES = (list, tuple, set, frozenset, deque)
_PASSTHROUGH_TYPES = (bool, int, float, complex)


def _binary_length(value: Any) -> int:
    if isinstance(value, memoryview):
        return value.nbytes
    return len(value)


def _truncate(text: str) -> str:
    if len(text) > MAX_STRING_LENGTH:
        return text[:MAX_STRING_LENGTH] + ELLIPSIS
    return text


def _object_fields(value: Any) -> Optional[dict]:
    """Return the instance attributes of a plain object, or None for everything else."""
    if isinstance(value, (type, ModuleType)) or callable(value):
        return None
    fields = getattr(value, "__dict__", None)
    if isinstance(fields, dict):
        return fields
    return None


# PUBLIC_INTERFACE
def summarize_value(value: Any, depth: int = 0, seen: Optional[Set[int]] = None) -> Any:
    """Return a bounded, logging-safe projection of value.

    Args:
        value: Anything.
        depth: Current nesting level; callers normally leave the default.
        seen: Identities of keyed structures already visited in this call. A new
            set is created for every top-level call.

    Returns:
        None and primitives unchanged; strings, sequences and keyed structures
        truncated; binary payloads replaced by a length descriptor; markers for
        cycles and excessive depth.
    """
    if value is None:
        return None
    if depth > MAX_DEPTH:
        return MAX_DEPTH_MARKER
    if seen is None:
        seen = set()

    if isinstance(value, _PASSTHROUGH_TYPES):
        return value
    if isinstance(value, _BINARY_TYPES):
        return f"[Binary {_binary_length(value)} bytes]"
    if isinstance(value, str):
        return _truncate(value)
    if isinstance(value, BaseException):
        return _truncate(f"{type(value).__name__}: {value}")

    if isinstance(value, _SEQUENCE_TYPES):
        items = list(value) if not isinstance(value, (list, tuple)) else value
        summary = [summarize_value(item, depth + 1, seen) for item in items[:MAX_ITEMS]]
        if len(items) > MAX_ITEMS:
            summary.append(f"[... {len(items)} items total]")
        return summary

    if isinstance(value, Mapping):
        entries = value
    else:
        entries = _object_fields(value)
        if entries is None:
            return value

    if id(value) in seen:
        return CIRCULAR_MARKER
    seen.add(id(value))

    summary = {}
    for key, item in islice(entries.items(), MAX_ITEMS):
        summary[key if isinstance(key, str) else str(key)] = summarize_value(item, depth + 1, seen)
    if len(entries) > MAX_ITEMS:
        summary[MORE_KEYS_FIELD] = len(entries) - MAX_ITEMS
    return summary
