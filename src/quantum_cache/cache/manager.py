"""Cache manager — owns the index and hands out one handle per remote."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from quantum_cache.cache.diagnostics import build_tree, clear_cache, total_size_bytes
from quantum_cache.cache.index import CacheIndex
from quantum_cache.cache.remote import RemoteCache
from quantum_cache.cache.stats import RemoteSummary
from quantum_cache.config.defaults import PRODUCT_NAME
from quantum_cache.config.paths import default_cache_root

if TYPE_CHECKING:
    from quantum_cache.config.schema import Settings

logger = logging.getLogger(__name__)


class CacheManager:
    """Entry point for a cache root: per-remote handles plus diagnostics."""

    def __init__(self, root: Path | None = None, atomic_writes: bool = False) -> None:
        self._root = Path(root) if root is not None else default_cache_root()
        self._index = CacheIndex(self._root, atomic_writes=atomic_writes)
        self._remotes: dict[str, RemoteCache] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> CacheManager:
        """A configured ``cache_dir`` is the base folder; the product folder goes under it."""
        root = settings.cache_dir / PRODUCT_NAME if settings.cache_dir is not None else None
        return cls(root=root, atomic_writes=settings.cache_atomic_writes)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def index(self) -> CacheIndex:
        return self._index

    def remote(self, remote_id: str) -> RemoteCache:
        """Handle for a remote, created on first use within this process."""
        handle = self._remotes.get(remote_id)
        if handle is None:
            handle = RemoteCache(remote_id, self._index)
            self._remotes[remote_id] = handle
        return handle

    def total_size_bytes(self) -> int:
        return total_size_bytes(self._root)

    def tree(self) -> dict[str, RemoteSummary]:
        return build_tree(self._index)

    def clear(self) -> None:
        """Wipe the cache on disk and forget all in-memory state."""
        clear_cache(self._root)
        self._index.reset()
        self._remotes.clear()
