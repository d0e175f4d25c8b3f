"""Content digests, remote identifiers, and PathKey encoding."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from pathlib import Path


def digest(content: str | bytes) -> str:
    """SHA256 hex digest of content. Text is hashed as UTF-8."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def hash_remote(remote: str) -> str:
    """Stable, filesystem-safe identifier for a remote spec."""
    return digest(remote)


def path_key(segments: Sequence[str]) -> str:
    """Encode a logical file path as a canonical, order-preserving key.

    The key is a compact JSON array, e.g. ``["components","Button.tsx"]``.
    """
    if isinstance(segments, str):
        raise ValueError(f"Path segments must be a sequence of strings, got {segments!r}")
    parts = list(segments)
    if not parts:
        raise ValueError("Path must have at least one segment")
    for part in parts:
        if not isinstance(part, str):
            raise ValueError(f"Path segment must be a string, got {type(part).__name__}")
    return json.dumps(parts, separators=(",", ":"), ensure_ascii=False)


def parse_path_key(key: str) -> list[str]:
    """Decode a PathKey back into its segments."""
    parts = json.loads(key)
    if not isinstance(parts, list) or not all(isinstance(p, str) for p in parts):
        raise ValueError(f"Not a path key: {key!r}")
    return parts


def blob_relpath(content_hash: str) -> Path:
    """Blob location relative to a remote directory, sharded by hash prefix."""
    return Path(content_hash[:2]) / content_hash
