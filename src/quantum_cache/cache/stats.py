"""Index records, diagnostic summaries, and hit/miss statistics."""

from __future__ import annotations

import time

from pydantic import BaseModel, Field


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class FileRecord(BaseModel):
    """One cached file of a remote, keyed by PathKey in ``IndexEntry.files``."""

    model_config = {"populate_by_name": True}

    content_hash: str = Field(alias="hash")
    cached_at: int = Field(default_factory=now_ms, alias="date")

    def age_ms(self, now: int | None = None) -> int:
        return (now_ms() if now is None else now) - self.cached_at

    def is_expired(self, ttl_ms: int, now: int | None = None) -> bool:
        return self.age_ms(now) > ttl_ms


class IndexEntry(BaseModel):
    """Metadata and file table for a single remote."""

    model_config = {"populate_by_name": True}

    remote_id: str = Field(alias="remote")
    last_touched: int = Field(default_factory=now_ms, alias="date")
    files: dict[str, FileRecord] = Field(default_factory=dict)


class FileSummary(BaseModel):
    size: int
    cached_at: int


class RemoteSummary(BaseModel):
    """Per-remote inventory reported by ``build_tree``."""

    last_touched: int
    files: dict[str, FileSummary] = Field(default_factory=dict)

    @property
    def size(self) -> int:
        return sum(f.size for f in self.files.values())


class CacheStats(BaseModel):
    """In-process lookup statistics for one remote handle."""

    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
