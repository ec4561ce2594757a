"""
Environment-driven settings for the bootstrap itself.

Env vars (all optional):
- CATPAW_HOME: application base directory (default: current working directory)
- CATPAW_ENV_FILE: defaults env file (default: .env.local)
- CATPAW_SITES_FILE: site list JSON document (default: newwex.json)
- CATPAW_CONFIG_MODULE: base config module, .py path or dotted name (default: index_config.py)
- CATPAW_SERVER_MODULE: server entry module exposing start(config) (default: index.py)
- CATPAW_LOG_SANITIZE_LEVEL: lowest level whose log args are sanitized (default: ERROR)

Relative file paths resolve against CATPAW_HOME.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from ..errors import ConfigurationError

DEFAULT_ENV_FILE = ".env.local"
DEFAULT_SITES_FILE = "newwex.json"
DEFAULT_CONFIG_MODULE = "index_config.py"
DEFAULT_SERVER_MODULE = "index.py"


# PUBLIC_INTERFACE
class BootstrapSettings(BaseModel):
    """Locations of the external collaborators and logging options."""
    base_dir: str = Field(..., description="Application base directory.")
    env_file: str = Field(DEFAULT_ENV_FILE, description="Defaults env file.")
    sites_file: str = Field(DEFAULT_SITES_FILE, description="Site list JSON document.")
    config_module: str = Field(DEFAULT_CONFIG_MODULE, description="Base config module.")
    server_module: str = Field(DEFAULT_SERVER_MODULE, description="Server entry module.")
    sanitize_level: int = Field(logging.ERROR, description="Lowest log level that is sanitized.")

    # PUBLIC_INTERFACE
    def resolve(self, path: str) -> str:
        """Resolve a file path against base_dir."""
        return path if os.path.isabs(path) else os.path.join(self.base_dir, path)

    @property
    def env_file_path(self) -> str:
        return self.resolve(self.env_file)

    @property
    def sites_file_path(self) -> str:
        return self.resolve(self.sites_file)

    # PUBLIC_INTERFACE
    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "BootstrapSettings":
        """Build settings from the environment, applying defaults for unset values."""
        env = os.environ if env is None else env

        def _get(key: str, default: str) -> str:
            return (env.get(key) or "").strip() or default

        level_name = _get("CATPAW_LOG_SANITIZE_LEVEL", "ERROR").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown CATPAW_LOG_SANITIZE_LEVEL: {level_name}")

        return cls(
            base_dir=os.path.abspath(_get("CATPAW_HOME", os.getcwd())),
            env_file=_get("CATPAW_ENV_FILE", DEFAULT_ENV_FILE),
            sites_file=_get("CATPAW_SITES_FILE", DEFAULT_SITES_FILE),
            config_module=_get("CATPAW_CONFIG_MODULE", DEFAULT_CONFIG_MODULE),
            server_module=_get("CATPAW_SERVER_MODULE", DEFAULT_SERVER_MODULE),
            sanitize_level=level,
        )
