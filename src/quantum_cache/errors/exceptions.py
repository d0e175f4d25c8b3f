"""Custom exception hierarchy for quantum-cache."""

from __future__ import annotations

from pathlib import Path


class QuantumCacheError(Exception):
    """Base exception for all quantum-cache errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class CacheConflictError(QuantumCacheError):
    """On-disk cache layout contradicts the data model — fatal, never patched over.

    Examples: the index document is a directory, a shard directory is a plain
    file, a blob path is a directory.
    """

    def __init__(self, path: str | Path, expected: str = "file", message: str = "") -> None:
        actual = "directory" if expected == "file" else "file"
        super().__init__(
            message or f"Cache {expected} expected but found a {actual}. Cannot continue.\n> {path}"
        )
        self.path = Path(path)
        self.expected = expected


class ConfigError(QuantumCacheError):
    """Merged configuration failed validation."""
