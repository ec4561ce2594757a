#!/usr/bin/env python3
"""
Launcher for the Catpaw bootstrap.

Usage:
  catpaw-bootstrap
  or
  python -m catpaw_backend.run_server

Loads the defaults env file, normalizes ports, assembles the configuration and
hands it to the server module's start(config). Fatal bootstrap errors are logged
and turned into exit status 1.
"""

import logging
import sys


# PUBLIC_INTERFACE
def main() -> int:
    """Run the bootstrap; return the process exit status."""
    from catpaw_backend.src.bootstrap import run
    from catpaw_backend.src.errors import BootstrapError
    from catpaw_backend.src.startup import configure_logging

    configure_logging()
    try:
        run()
    except BootstrapError as e:
        logging.getLogger("startup").error("Bootstrap failed [%s]: %s", e.code, e.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
