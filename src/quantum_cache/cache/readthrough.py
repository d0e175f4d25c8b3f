"""Read-through lookups: serve from cache, otherwise fetch and store."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from quantum_cache.cache.remote import RemoteCache

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Retrieves a file from a remote; returns None when it cannot."""

    def __call__(self, remote: str, segments: Sequence[str]) -> str | bytes | None: ...


def fetch_through(handle: RemoteCache, segments: Sequence[str], fetcher: Fetcher) -> str | None:
    """Return cached content, falling back to ``fetcher`` on a miss.

    Fetched content is added to the cache. Failed or empty fetches are not
    cached and yield None, as does fetched content that is not UTF-8 text.
    """
    cached = handle.get_file(segments)
    if cached is not None:
        return cached

    fetched = fetcher(handle.remote, segments)
    if not fetched:
        logger.info("Could not fetch %s from %s", "/".join(segments), handle.remote)
        return None

    handle.add_file(segments, fetched)
    if isinstance(fetched, str):
        return fetched
    try:
        return fetched.decode("utf-8")
    except UnicodeDecodeError:
        logger.info("Fetched %s from %s is not text", "/".join(segments), handle.remote)
        return None
