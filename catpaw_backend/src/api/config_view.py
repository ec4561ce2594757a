"""
Read-only views of the assembled configuration for local previews.
"""

from fastapi import APIRouter, Request

from ..safe_log import summarize_value
from .redact import redact_config

router = APIRouter()


# PUBLIC_INTERFACE
@router.get(
    "/config",
    tags=["Config"],
    summary="Assembled configuration (secrets masked)",
    description="Returns the configuration passed to start(config), with provider tokens and cookies masked.",
)
def get_config(request: Request):
    """Return the masked, summarized configuration."""
    config = request.app.state.catpaw_config
    return summarize_value(redact_config(config))


# PUBLIC_INTERFACE
@router.get(
    "/sites",
    tags=["Config"],
    summary="Configured sites",
    description="Returns the site records from config['sites']['list'] and their count.",
)
def get_sites(request: Request):
    """Return the configured site list."""
    sites = request.app.state.catpaw_config.get("sites", {}).get("list", [])
    return {"count": len(sites), "sites": summarize_value(sites)}
