"""
Configuration assembly.

assemble_config() merges the base configuration with the external site list and
provider secrets taken from the environment. The result is a new top-level dict;
every nested dict that receives a value is copied first, so the base
configuration is never modified.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple

_logger = logging.getLogger("bootstrap.assemble")

# env var -> (config section, field). Fixed set of provider credentials.
SECRET_ENV_FIELDS: Tuple[Tuple[str, str, str], ...] = (
    ("ALI_TOKEN", "ali", "token"),
    ("QUARK_COOKIE", "quark", "cookie"),
    ("UC_COOKIE", "uc", "cookie"),
    ("BAIDU_COOKIE", "baidu", "cookie"),
)


def _copied_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    current = config.get(name)
    section = dict(current) if isinstance(current, Mapping) else {}
    config[name] = section
    return section


# PUBLIC_INTERFACE
def assemble_config(
    base: Optional[Mapping[str, Any]],
    env: Mapping[str, str],
    sites: Optional[Sequence[Any]] = None,
) -> Dict[str, Any]:
    """Return the final configuration for the server's start(config).

    Args:
        base: Base configuration object (a mapping; None is treated as empty).
        env: Environment mapping to read provider secrets from.
        sites: Site records from the site list document. When non-empty they
            replace config["sites"]["list"] entirely.

    Returns:
        A new dict where config["sites"]["list"] is always a list and each
        secret from SECRET_ENV_FIELDS that is set in env overrides the base value.
    """
    config: Dict[str, Any] = dict(base or {})

    site_section = _copied_section(config, "sites")
    current: Any = site_section.get("list")
    site_list: List[Any] = list(current) if isinstance(current, list) else []
    if sites:
        site_list = list(sites)
    site_section["list"] = site_list

    injected = []
    for env_key, section, field in SECRET_ENV_FIELDS:
        value = env.get(env_key)
        if not value:
            continue
        _copied_section(config, section)[field] = value
        injected.append(env_key)

    _logger.info(
        "Config assembled: sites=%d, secrets_from_env=%s",
        len(site_list),
        ",".join(injected) or "none",
    )
    return config
