"""Platform-specific location of the cache root."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from quantum_cache.config.defaults import PRODUCT_NAME


def local_cache_folder() -> Path | None:
    """The user's cache directory for this platform, if it can be determined."""
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA")
        return Path(base) if base else None

    home = os.environ.get("HOME")
    if sys.platform == "darwin":
        return Path(home) / "Library" / "Caches" if home else None

    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg)
    return Path(home) / ".cache" if home else None


def default_cache_root() -> Path:
    """Cache root used when none is configured."""
    base = local_cache_folder() or Path.cwd() / ".cache"
    return base / PRODUCT_NAME
