"""
Dev server API package: health and read-only config routers.
"""

# NOTE: Do NOT import src.app here to avoid circular imports when src.app imports from src.api.*
from . import config_view  # noqa: F401
from . import health  # noqa: F401

__all__ = [
    "config_view",
    "health",
]
