"""
Loading of the external collaborators: the base config module and the server
entry module.

A target is either a path to a .py file (relative paths resolve against the
application base directory) or a dotted module name importable from sys.path.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import os
import sys
from types import ModuleType
from typing import Any, Callable, Dict, Mapping

from ..errors import ConfigurationError, ServerContractError

_logger = logging.getLogger("bootstrap.loader")

SERVER_CONTRACT_MESSAGE = "Catpaw server module does not export start()"
# sys.modules namespace for modules loaded from file paths
EXTERNAL_MODULE_PREFIX = "catpaw_ext_"


def _is_file_target(target: str) -> bool:
    return target.endswith(".py") or os.sep in target or "/" in target


# PUBLIC_INTERFACE
def import_target(target: str, base_dir: str) -> ModuleType:
    """Import a .py file path or dotted module name and return the module.

    Raises ImportError (or whatever the module raises while executing).
    """
    if not _is_file_target(target):
        return importlib.import_module(target)

    path = target if os.path.isabs(target) else os.path.join(base_dir, target)
    if not os.path.isfile(path):
        raise ModuleNotFoundError(f"No module file at {path}")
    name = EXTERNAL_MODULE_PREFIX + os.path.splitext(os.path.basename(path))[0].replace(".", "_")
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module


def _module_globals(module: ModuleType) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(module).items()
        if not key.startswith("_") and not callable(value) and not isinstance(value, ModuleType)
    }


# PUBLIC_INTERFACE
def load_base_config(target: str, base_dir: str) -> Mapping[str, Any]:
    """Return the base configuration object exposed by the config module.

    Lookup order: module.default, module.config, then the module's public
    non-callable globals. Raises ConfigurationError if the module cannot be
    imported or the object found is not a mapping.
    """
    try:
        module = import_target(target, base_dir)
    except ImportError as e:
        raise ConfigurationError(f"Cannot load config module {target}: {e}", target=target) from e

    config = getattr(module, "default", None)
    if config is None:
        config = getattr(module, "config", None)
    if config is None:
        config = _module_globals(module)
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"Config module {target} exposes {type(config).__name__}, expected a mapping",
            target=target,
        )
    _logger.info("Base config loaded from %s (%d top-level key(s))", target, len(config))
    return config


# PUBLIC_INTERFACE
def load_server_entry(target: str, base_dir: str) -> Callable[[Dict[str, Any]], Any]:
    """Return the start(config) callable of the server entry module.

    Raises ServerContractError when the module cannot be imported or does not
    expose a callable start.
    """
    try:
        module = import_target(target, base_dir)
    except ImportError as e:
        raise ServerContractError(f"{SERVER_CONTRACT_MESSAGE}: {e}", target=target) from e

    start = getattr(module, "start", None)
    if not callable(start):
        raise ServerContractError(SERVER_CONTRACT_MESSAGE, target=target)
    return start
