"""
Application startup utilities: configure logging before the bootstrap runs.

Call configure_logging() as early as possible so every bootstrap step (env file,
ports, config assembly) logs through the same root handlers that the log
sanitizer is later attached to.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# PUBLIC_INTERFACE
def configure_logging(env: Optional[Mapping[str, str]] = None) -> logging.Logger:
    """Configure basic root logging if the host has not configured it already.

    LOG_LEVEL (default INFO) selects the root level. Returns the 'startup' logger.
    """
    env = os.environ if env is None else env
    if not logging.getLogger().handlers:
        level_name = (env.get("LOG_LEVEL") or "INFO").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO
        logging.basicConfig(level=level, format=LOG_FORMAT)

    logger = logging.getLogger("startup")
    logger.debug("Logging configured (level=%s)", logging.getLevelName(logging.getLogger().level))
    return logger
