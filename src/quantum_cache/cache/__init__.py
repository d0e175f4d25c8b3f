"""Cache subsystem — per-remote, content-addressed, disk-backed."""

from quantum_cache.cache.diagnostics import build_tree, clear_cache, total_size_bytes
from quantum_cache.cache.index import CacheIndex
from quantum_cache.cache.keys import digest, hash_remote, parse_path_key, path_key
from quantum_cache.cache.manager import CacheManager
from quantum_cache.cache.readthrough import Fetcher, fetch_through
from quantum_cache.cache.remote import CACHE_TTL_MS, RemoteCache
from quantum_cache.cache.stats import (
    CacheStats,
    FileRecord,
    FileSummary,
    IndexEntry,
    RemoteSummary,
)

__all__ = [
    "CACHE_TTL_MS",
    "CacheIndex",
    "CacheManager",
    "CacheStats",
    "Fetcher",
    "FileRecord",
    "FileSummary",
    "IndexEntry",
    "RemoteCache",
    "RemoteSummary",
    "build_tree",
    "clear_cache",
    "digest",
    "fetch_through",
    "hash_remote",
    "parse_path_key",
    "path_key",
    "total_size_bytes",
]
