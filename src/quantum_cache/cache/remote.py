"""Per-remote handle over the cache index and blob store."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from pathlib import Path

from quantum_cache.cache.index import CacheIndex
from quantum_cache.cache.keys import blob_relpath, digest, hash_remote, path_key
from quantum_cache.cache.stats import CacheStats, FileRecord, IndexEntry, now_ms
from quantum_cache.errors.exceptions import CacheConflictError

logger = logging.getLogger(__name__)

CACHE_TTL_MS = 1000 * 60 * 60 * 24 * 7  # 1 week


class RemoteCache:
    """Read/write/evict cached files for one remote.

    Reads succeed only when the record is younger than the TTL *and* the
    blob on disk still hashes to the recorded digest. Anything else is a
    miss (``None``); stale or corrupt records are left in place.
    """

    def __init__(self, remote: str, index: CacheIndex, ttl_ms: int = CACHE_TTL_MS) -> None:
        self._remote = remote
        self._remote_hash = hash_remote(remote)
        self._index = index
        self._ttl_ms = ttl_ms
        self._cache_dir = index.remote_dir(self._remote_hash)
        self._stats = CacheStats()
        self._open()

    @property
    def remote(self) -> str:
        return self._remote

    @property
    def remote_hash(self) -> str:
        return self._remote_hash

    @property
    def cache_root(self) -> Path:
        return self._index.root

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def blob_path(self, content_hash: str) -> Path:
        return self._cache_dir / blob_relpath(content_hash)

    def add_file(self, segments: Sequence[str], content: str | bytes) -> None:
        """Store content under a logical path, replacing any previous record."""
        key = path_key(segments)
        data = content.encode("utf-8") if isinstance(content, str) else content
        content_hash = digest(data)
        blob = self.blob_path(content_hash)

        shard = blob.parent
        if shard.exists() and not shard.is_dir():
            raise CacheConflictError(shard, expected="directory")
        if blob.is_dir():
            raise CacheConflictError(blob, expected="file")
        shard.mkdir(parents=True, exist_ok=True)
        blob.write_bytes(data)

        entry = self._entry(create=True)
        entry.files[key] = FileRecord(content_hash=content_hash, cached_at=now_ms())
        self._index.persist()
        logger.debug("Cached %s for %s (%s)", key, self._remote, content_hash[:12])

    def get_file_bytes(self, segments: Sequence[str]) -> bytes | None:
        """Raw cached bytes for a logical path, or None on any miss."""
        data = self._read(path_key(segments))
        if data is not None:
            self._stats.hits += 1
        return data

    def get_file(self, segments: Sequence[str]) -> str | None:
        """Cached content for a logical path as text, or None on any miss.

        Blobs that are not valid UTF-8 are a miss here; use
        ``get_file_bytes`` for binary content.
        """
        key = path_key(segments)
        data = self._read(key)
        if data is None:
            return None
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            return self._miss(key, "not text")
        self._stats.hits += 1
        return text

    def remove_file(self, segments: Sequence[str]) -> None:
        """Drop a logical path and its blob. No-op if not cached.

        Blobs are shared by content: another path of this remote cached with
        identical content loses its blob too and misses until re-added.
        """
        key = path_key(segments)
        entry = self._entry()
        record = entry.files.get(key) if entry else None
        if record is None:
            return

        blob = self.blob_path(record.content_hash)
        if blob.is_file():
            blob.unlink()

        del entry.files[key]
        self._index.persist()

    def _read(self, key: str) -> bytes | None:
        entry = self._entry()
        record = entry.files.get(key) if entry else None

        if record is None:
            return self._miss(key, "not cached")
        if record.is_expired(self._ttl_ms):
            return self._miss(key, "expired")

        blob = self.blob_path(record.content_hash)
        if not blob.exists():
            return self._miss(key, "blob missing")
        if blob.is_dir():
            raise CacheConflictError(blob, expected="file")

        data = blob.read_bytes()
        if digest(data) != record.content_hash:
            return self._miss(key, "hash mismatch")
        return data

    def _open(self) -> None:
        path = self._cache_dir
        if path.exists() and not path.is_dir():
            raise CacheConflictError(path, expected="directory")

        if not path.exists():
            self._index.put(self._remote_hash, IndexEntry(remote_id=self._remote))
            path.mkdir(parents=True, exist_ok=True)
        elif self._remote_hash not in self._index:
            # Blobs without an index entry: half-initialized or corrupted, start over.
            logger.info("Resetting orphaned cache directory for %s", self._remote)
            self._index.put(self._remote_hash, IndexEntry(remote_id=self._remote))
            shutil.rmtree(path)
            path.mkdir(parents=True, exist_ok=True)
        else:
            self._index.get(self._remote_hash).last_touched = now_ms()

    def _entry(self, create: bool = False) -> IndexEntry | None:
        entry = self._index.get(self._remote_hash)
        if entry is None and create:
            entry = IndexEntry(remote_id=self._remote)
            self._index.put(self._remote_hash, entry)
        return entry

    def _miss(self, key: str, reason: str) -> None:
        self._stats.misses += 1
        logger.debug("Cache miss for %s in %s: %s", key, self._remote, reason)
        return None

    def __repr__(self) -> str:
        return f"RemoteCache(remote={self._remote!r})"
