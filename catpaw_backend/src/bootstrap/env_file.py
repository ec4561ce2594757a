"""
Defaults env file loading.

The defaults file (conventionally `.env.local`) holds checked-in or local
development values. Real deployment variables always win: a key that is already
present in the environment is never overwritten by the file.

Lines are tokenized by python-dotenv's parser. Unquoted values are taken raw
from the line: everything after the first '=', untrimmed, with '#' and further
'=' characters kept, since provider cookies routinely contain both. Quoted
values are unquoted and unescaped by dotenv.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, MutableMapping, Optional, Union

from dotenv.parser import Binding, parse_stream

_logger = logging.getLogger("bootstrap.env")

_QUOTES = ("'", '"')


def _binding_value(binding: Binding) -> Optional[str]:
    """Return the raw text after '=' for unquoted values, dotenv's value otherwise."""
    if binding.value is None:
        return None
    text = binding.original.string.lstrip()
    _, sep, rest = text.partition("=")
    if not sep or rest.lstrip(" \t").startswith(_QUOTES):
        return binding.value
    for ending in ("\r\n", "\n", "\r"):
        if rest.endswith(ending):
            return rest[: -len(ending)]
    return rest


# PUBLIC_INTERFACE
def read_env_file(path: Union[str, os.PathLike]) -> Dict[str, str]:
    """Parse the KEY=VALUE lines of path, skipping comments, blanks and bare keys."""
    values: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8") as fh:
        for binding in parse_stream(fh):
            if binding.error:
                _logger.warning("Skipping unparsable line %d in %s", binding.original.line, path)
                continue
            if not binding.key:
                continue
            value = _binding_value(binding)
            if value is not None:
                values[binding.key] = value
    return values


# PUBLIC_INTERFACE
def load_env_file(path: Union[str, os.PathLike], env: MutableMapping[str, str]) -> Dict[str, str]:
    """Load KEY=VALUE lines from path into env without overriding existing keys.

    Args:
        path: Location of the defaults file. A missing file is a no-op.
        env: Environment mapping to populate (os.environ in production).

    Returns:
        The keys and values that were actually applied.

    Notes:
        No interpolation happens, so values such as "$OTHER_PORT" reach the
        port normalizer untouched.
    """
    if not os.path.isfile(path):
        _logger.debug("No env file at %s", path)
        return {}

    try:
        values = read_env_file(path)
    except (OSError, UnicodeDecodeError) as e:
        _logger.warning("Failed to read env file %s: %s", path, e)
        return {}

    applied: Dict[str, str] = {}
    for key, value in values.items():
        if key in env:
            continue
        env[key] = value
        applied[key] = value

    _logger.info("Env file %s loaded: %d key(s) applied, %d already set", path, len(applied), len(values) - len(applied))
    return applied
