"""On-disk cache index: remote hash -> remote metadata and file table.

The index is a single JSON object at ``<root>/cache.json``. It is read once
and rewritten in full after every mutation. There is no locking: two
processes mutating the same root race and the last ``persist()`` wins.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from quantum_cache.cache.stats import IndexEntry
from quantum_cache.errors.exceptions import CacheConflictError

logger = logging.getLogger(__name__)

INDEX_FILE_NAME = "cache.json"
REMOTES_DIR_NAME = "remotes"


class CacheIndex:
    """In-memory mirror of the index document for one cache root."""

    def __init__(self, root: Path, atomic_writes: bool = False) -> None:
        self._root = Path(root)
        self._atomic_writes = atomic_writes
        self._entries: dict[str, IndexEntry] = {}
        self._loaded = False

    @property
    def root(self) -> Path:
        return self._root

    @property
    def index_path(self) -> Path:
        return self._root / INDEX_FILE_NAME

    @property
    def remotes_dir(self) -> Path:
        return self._root / REMOTES_DIR_NAME

    def remote_dir(self, remote_hash: str) -> Path:
        return self.remotes_dir / remote_hash

    def load(self) -> CacheIndex:
        """Create the index document if needed and read it into memory."""
        path = self.index_path
        path.parent.mkdir(parents=True, exist_ok=True)

        if path.is_dir():
            raise CacheConflictError(path, expected="file")
        if not path.exists():
            path.write_text("{}", encoding="utf-8")

        self._entries = self._parse(path.read_bytes())
        self._loaded = True
        logger.debug("Loaded cache index %s (%d remotes)", path, len(self._entries))
        return self

    def persist(self) -> None:
        """Overwrite the index document with the in-memory state."""
        self._ensure_loaded()
        path = self.index_path
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(
            {h: e.model_dump(by_alias=True) for h, e in self._entries.items()},
            indent=4,
            ensure_ascii=False,
        )

        if self._atomic_writes:
            tmp = path.with_suffix(".json.tmp")
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, path)
        else:
            path.write_text(payload, encoding="utf-8")

    def get(self, remote_hash: str) -> IndexEntry | None:
        self._ensure_loaded()
        return self._entries.get(remote_hash)

    def put(self, remote_hash: str, entry: IndexEntry) -> None:
        self._ensure_loaded()
        self._entries[remote_hash] = entry

    def discard(self, remote_hash: str) -> None:
        self._ensure_loaded()
        self._entries.pop(remote_hash, None)

    def entries(self) -> dict[str, IndexEntry]:
        """Snapshot of all entries keyed by remote hash."""
        self._ensure_loaded()
        return dict(self._entries)

    def reset(self) -> None:
        """Forget every entry in memory. Does not touch disk."""
        self._entries = {}
        self._loaded = True

    def __contains__(self, remote_hash: object) -> bool:
        self._ensure_loaded()
        return remote_hash in self._entries

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._entries)

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _parse(self, data: bytes) -> dict[str, IndexEntry]:
        # A broken index only costs re-fetches, so fall back to empty.
        try:
            raw = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Cache index %s is not valid JSON, starting empty: %s", self.index_path, e)
            return {}

        if not isinstance(raw, dict):
            logger.warning("Cache index %s is not a JSON object, starting empty", self.index_path)
            return {}

        try:
            return {h: IndexEntry.model_validate(e) for h, e in raw.items()}
        except ValidationError as e:
            logger.warning("Cache index %s has malformed entries, starting empty: %s", self.index_path, e)
            return {}
