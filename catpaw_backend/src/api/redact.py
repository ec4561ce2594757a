"""
Masking of provider secrets for config views.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Dict

from ..bootstrap.assemble import SECRET_ENV_FIELDS


def mask_secret(value: str, keep: int = 4) -> str:
    """Mask secret preserving last 'keep' chars."""
    if not value:
        return value
    if len(value) <= keep:
        return "*" * len(value)
    return "*" * (len(value) - keep) + value[-keep:]


# PUBLIC_INTERFACE
def redact_config(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a deep copy of config with every provider secret field masked."""
    redacted = copy.deepcopy(dict(config))
    for _env_key, section, field in SECRET_ENV_FIELDS:
        part = redacted.get(section)
        if isinstance(part, dict) and isinstance(part.get(field), str):
            part[field] = mask_secret(part[field])
    return redacted
