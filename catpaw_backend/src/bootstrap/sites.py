"""
Site list document loading.

The site list is a JSON document of the form {"sites": [...]}. Each entry is an
opaque record handed to the server untouched; only the array itself is checked.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, List, Union

_logger = logging.getLogger("bootstrap.sites")


# PUBLIC_INTERFACE
def load_site_list(path: Union[str, os.PathLike]) -> List[Any]:
    """Return the 'sites' array of the JSON document at path.

    A missing, unreadable or malformed document is not fatal: a warning is
    logged and an empty list returned. A document whose 'sites' field is absent
    or not an array also yields an empty list.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            parsed = json.load(fh)
    except (OSError, ValueError) as e:
        _logger.warning("Failed to read %s sites: %s", os.path.basename(str(path)), e)
        return []

    sites = parsed.get("sites") if isinstance(parsed, dict) else None
    if not isinstance(sites, list):
        return []
    _logger.info("Loaded %d site(s) from %s", len(sites), path)
    return sites
