"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Folder created under the platform cache directory
PRODUCT_NAME = "quantum-cli"

# Default cache settings
DEFAULT_CACHE_DIR = None  # resolved per platform, see config.paths
DEFAULT_CACHE_ATOMIC_WRITES = False

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_dir": DEFAULT_CACHE_DIR,
        "cache_atomic_writes": DEFAULT_CACHE_ATOMIC_WRITES,
        "log_level": DEFAULT_LOG_LEVEL,
    }
