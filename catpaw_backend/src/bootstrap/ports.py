"""
Port environment variable normalization.

normalize_port_env() coerces a port-like variable into a canonical TCP port
string, following one level of "$OTHER_VAR" indirection and falling back to a
default when the value is missing or unusable.
"""

from __future__ import annotations

import logging
import math
import re
from typing import MutableMapping, Optional, Union

_logger = logging.getLogger("bootstrap.ports")

DEFAULT_PORT = "10000"
MAX_PORT = 65535

# decimal literal with optional fraction and exponent; no underscores, hex or words
_NUMBER_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)(e[+-]?\d+)?\s*$", re.IGNORECASE)


# PUBLIC_INTERFACE
def parse_port(raw: Optional[str]) -> Optional[int]:
    """Return raw as an int port in [0, 65535], or None if it is not one.

    Surrounding whitespace, leading zeros and integral float forms ("8080.0",
    "8e3") are accepted; fractions, digit separators, hex and words such as
    "inf" are not.
    """
    if raw is None or not _NUMBER_RE.match(raw):
        return None
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    if number < 0 or number > MAX_PORT:
        return None
    return int(number)


# PUBLIC_INTERFACE
def normalize_port_env(
    env: MutableMapping[str, str],
    key: str,
    fallback: Optional[Union[str, int]] = None,
) -> Optional[str]:
    """Normalize env[key] in place and return its final value.

    - missing/empty: set to fallback when one is given, else leave unset
    - valid port: store its canonical string form
    - "$NAME": adopt env[NAME] when that is a valid port
    - anything else: fallback when given, else keep the invalid value (warned)
    """
    raw = env.get(key)
    has_fallback = fallback is not None and str(fallback) != ""

    if not raw:
        if has_fallback:
            env[key] = str(fallback)
        return env.get(key)

    port = parse_port(raw)
    if port is not None:
        env[key] = str(port)
        return env[key]

    if raw.startswith("$"):
        ref = raw[1:]
        port = parse_port(env.get(ref))
        if port is not None:
            _logger.debug("%s resolved through $%s to %d", key, ref, port)
            env[key] = str(port)
            return env[key]

    if has_fallback:
        _logger.warning("Invalid port in %s=%r; using fallback %s", key, raw, fallback)
        env[key] = str(fallback)
    else:
        _logger.warning("Invalid port in %s=%r and no fallback given; leaving it unchanged", key, raw)
    return env[key]


# PUBLIC_INTERFACE
def normalize_startup_ports(env: MutableMapping[str, str], default: str = DEFAULT_PORT) -> None:
    """Normalize PORT (default 10000), then DEV_HTTP_PORT defaulting to the resolved PORT."""
    normalize_port_env(env, "PORT", default)
    normalize_port_env(env, "DEV_HTTP_PORT", env.get("PORT") or default)
