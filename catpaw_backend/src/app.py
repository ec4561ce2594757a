from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI

from .api import config_view as config_router
from .api import health as health_router
from .safe_log import FaultGuard

openapi_tags = [
    {"name": "Health", "description": "Health and readiness checks."},
    {"name": "Config", "description": "Read-only views of the assembled configuration."},
]


# PUBLIC_INTERFACE
def create_app(config: Dict[str, Any], guard: Optional[FaultGuard] = None) -> FastAPI:
    """Create the FastAPI dev server app around an assembled configuration.

    Notes:
        - The config is stored on app.state.catpaw_config for the routers.
        - On startup the running event loop gets the fault guard's exception
          handler, so unretrieved task failures are logged like unhandled
          rejections (auth failures reduced to a notice).
    """
    guard = guard or FaultGuard()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        guard.install_loop(asyncio.get_running_loop())
        logging.getLogger("startup").info(
            "Dev server ready; %d site(s) configured", len(config.get("sites", {}).get("list", []))
        )
        yield

    app = FastAPI(
        title="Catpaw Dev Server",
        description="Local preview server exposing health and the assembled Catpaw configuration.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.catpaw_config = config
    app.state.fault_guard = guard

    app.include_router(health_router.router)
    app.include_router(config_router.router)
    return app
