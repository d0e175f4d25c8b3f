"""Whole-cache inspection and reset for operator commands.

These read the disk layout and the index directly, independent of any live
``RemoteCache``. They assume a consistent cache: inconsistencies surface as
exceptions instead of being skipped.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from quantum_cache.cache.index import INDEX_FILE_NAME, REMOTES_DIR_NAME, CacheIndex
from quantum_cache.cache.keys import blob_relpath
from quantum_cache.cache.stats import FileSummary, RemoteSummary
from quantum_cache.errors.exceptions import CacheConflictError, QuantumCacheError

logger = logging.getLogger(__name__)


def total_size_bytes(root: Path) -> int:
    """Sum of the sizes of every file under the cache root."""
    root = Path(root)
    if not root.exists():
        return 0
    return _folder_size(root)


def _folder_size(folder: Path) -> int:
    size = 0
    for child in folder.iterdir():
        if child.is_dir():
            size += _folder_size(child)
        else:
            size += child.stat().st_size
    return size


def build_tree(index: CacheIndex) -> dict[str, RemoteSummary]:
    """Per-remote inventory of cached files with their on-disk sizes.

    This is a raw view: TTL and hash checks are not applied, so stale or
    tampered blobs are reported with whatever size they have on disk.
    """
    if not index.root.exists():
        return {}

    tree: dict[str, RemoteSummary] = {}
    for remote_hash, entry in index.entries().items():
        remote_dir = index.remote_dir(remote_hash)
        summary = RemoteSummary(last_touched=entry.last_touched)

        for key, record in entry.files.items():
            blob = remote_dir / blob_relpath(record.content_hash)
            if blob.is_dir():
                raise CacheConflictError(blob, expected="file")
            summary.files[key] = FileSummary(size=blob.stat().st_size, cached_at=record.cached_at)

        tree[entry.remote_id] = summary
    return tree


def clear_cache(root: Path) -> None:
    """Delete the whole cache root: index document and every remote.

    Refuses a non-empty directory with neither an index document nor a
    remotes folder.
    """
    root = Path(root)
    if root.exists():
        markers = (root / INDEX_FILE_NAME, root / REMOTES_DIR_NAME)
        if not any(m.exists() for m in markers) and any(root.iterdir()):
            raise QuantumCacheError(f"Not a cache directory, refusing to clear.\n> {root}")
        shutil.rmtree(root)
        logger.info("Cleared cache at %s", root)
