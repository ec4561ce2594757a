"""
Bootstrap steps: defaults env file, port normalization, config assembly,
external module loading and the sequence that ties them together.
"""

from .assemble import SECRET_ENV_FIELDS, assemble_config  # noqa: F401
from .env_file import load_env_file  # noqa: F401
from .loader import load_base_config, load_server_entry  # noqa: F401
from .ports import normalize_port_env, normalize_startup_ports, parse_port  # noqa: F401
from .runner import BootstrapResult, prepare_config, run  # noqa: F401
from .settings import BootstrapSettings  # noqa: F401
from .sites import load_site_list  # noqa: F401

__all__ = [
    "BootstrapResult",
    "BootstrapSettings",
    "SECRET_ENV_FIELDS",
    "assemble_config",
    "load_base_config",
    "load_env_file",
    "load_server_entry",
    "load_site_list",
    "normalize_port_env",
    "normalize_startup_ports",
    "parse_port",
    "prepare_config",
    "run",
]
