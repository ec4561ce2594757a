"""
Stand-in server entry for local previews.

Point the bootstrap at it with:
  CATPAW_SERVER_MODULE=catpaw_backend.dev_server catpaw-bootstrap

It exposes start(config) like the real Catpaw server module and serves health
and a masked view of the assembled configuration on DEV_HTTP_PORT.
"""

import os
from typing import Any, Dict, Mapping, Optional

from catpaw_backend.src.bootstrap.ports import DEFAULT_PORT, parse_port
from catpaw_backend.src.errors import ConfigurationError


# PUBLIC_INTERFACE
def resolve_bind(env: Optional[Mapping[str, str]] = None) -> tuple:
    """Return (host, port) from HOST and DEV_HTTP_PORT (falling back to PORT, then 10000).

    Raises ConfigurationError when the selected port value is not a valid port.
    """
    env = os.environ if env is None else env
    host = env.get("HOST") or "0.0.0.0"
    raw = env.get("DEV_HTTP_PORT") or env.get("PORT") or DEFAULT_PORT
    port = parse_port(raw)
    if port is None:
        raise ConfigurationError(f"Invalid dev server port: {raw!r}")
    return host, port


# PUBLIC_INTERFACE
def start(config: Dict[str, Any]) -> None:
    """Run uvicorn with the dev server app until interrupted."""
    import uvicorn

    from catpaw_backend.src.app import create_app

    host, port = resolve_bind()
    uvicorn.run(create_app(config), host=host, port=port, reload=False, lifespan="on")
