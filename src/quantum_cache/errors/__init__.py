"""Error types for quantum-cache."""

from quantum_cache.errors.exceptions import (
    CacheConflictError,
    ConfigError,
    QuantumCacheError,
)

__all__ = [
    "QuantumCacheError",
    "CacheConflictError",
    "ConfigError",
]
