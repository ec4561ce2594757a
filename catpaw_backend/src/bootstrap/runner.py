"""
The bootstrap sequence.

run() performs, strictly in order:
1. load the defaults env file (existing variables win),
2. normalize PORT and DEV_HTTP_PORT,
3. load the base config and the site list, assemble the final config,
4. attach the log sanitizer and install the fault guard,
5. load the server entry module and call start(config) exactly once.

The environment is passed explicitly; production wiring passes os.environ so the
server sees the normalized values.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, MutableMapping, Optional

from ..safe_log import FaultGuard, install_log_sanitizer
from .assemble import assemble_config
from .env_file import load_env_file
from .loader import load_base_config, load_server_entry
from .ports import normalize_startup_ports
from .settings import BootstrapSettings
from .sites import load_site_list

_logger = logging.getLogger("bootstrap")


@dataclass
class BootstrapResult:
    """What run() produced: the config handed to start() and start()'s return value."""
    config: Dict[str, Any]
    settings: BootstrapSettings
    guard: FaultGuard
    started: Any = None
    env_applied: Dict[str, str] = field(default_factory=dict)


# PUBLIC_INTERFACE
def prepare_config(
    settings: BootstrapSettings,
    env: MutableMapping[str, str],
) -> Dict[str, Any]:
    """Normalize ports and return the assembled configuration (steps 2-3)."""
    normalize_startup_ports(env)
    base = load_base_config(settings.config_module, settings.base_dir)
    sites = load_site_list(settings.sites_file_path)
    return assemble_config(base, env, sites)


# PUBLIC_INTERFACE
def run(
    settings: Optional[BootstrapSettings] = None,
    env: Optional[MutableMapping[str, str]] = None,
    guard: Optional[FaultGuard] = None,
) -> BootstrapResult:
    """Run the full bootstrap and start the server.

    Args:
        settings: Explicit settings. When omitted they are read from env, and
            read again after the env file is loaded so the file may set them.
        env: Environment mapping (default: os.environ).
        guard: Fault guard to install (default: a new FaultGuard).

    Raises:
        ConfigurationError: invalid settings or unusable config module.
        ServerContractError: the server module is missing start(config).
    """
    env = os.environ if env is None else env

    initial = settings or BootstrapSettings.from_env(env)
    applied = load_env_file(initial.env_file_path, env)
    if settings is None:
        settings = BootstrapSettings.from_env(env)

    config = prepare_config(settings, env)

    install_log_sanitizer(level=settings.sanitize_level)
    guard = (guard or FaultGuard()).install()

    start = load_server_entry(settings.server_module, settings.base_dir)
    _logger.info(
        "Starting server from %s (PORT=%s, DEV_HTTP_PORT=%s)",
        settings.server_module,
        env.get("PORT"),
        env.get("DEV_HTTP_PORT"),
    )
    started = start(config)
    return BootstrapResult(config=config, settings=settings, guard=guard, started=started, env_applied=applied)
