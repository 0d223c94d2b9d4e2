# -*- coding: utf-8 -*-
"""Application version detection utilities.

Provides a single public function, ``get_app_version()``, used by the CLI's
``--version`` flag.
"""

from __future__ import annotations

from importlib import metadata
from typing import Optional

_CACHED_VERSION: Optional[str] = None

DISTRIBUTION_NAME = "grayscale-svg"


def get_app_version() -> str:
    """Return the application version string (e.g., ``v1.2.3``).

    Installed: read from the distribution metadata.
    Development fallback: return "vdev" when the package is not installed.
    """
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    try:
        text = metadata.version(DISTRIBUTION_NAME).strip()
    except metadata.PackageNotFoundError:
        text = ""

    _CACHED_VERSION = (text if text.startswith("v") else f"v{text}") if text else "vdev"
    return _CACHED_VERSION
