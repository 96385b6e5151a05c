"""Bounded in-memory poster image cache using cachetools.FIFOCache.

Entries are raw encoded image bytes keyed by image path.  The cache holds
at most ``capacity`` entries.  Inserting a new path while full evicts
exactly one entry first: the oldest inserted one.  This is insertion-order
(FIFO) eviction, not access-recency LRU; reads never reorder entries,
which is what lets them run concurrently under a shared lock.
"""

from __future__ import annotations

import structlog
from cachetools import FIFOCache

from moviecache.utils.concurrency import ReadWriteLock

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_CAPACITY = 50


class InMemoryImageCache:
    """Thread-safe, bounded path -> bytes cache.

    Parameters
    ----------
    capacity:
        Maximum number of images held at rest.  Must be at least 1.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            msg = f"Image cache capacity must be >= 1, got {capacity}"
            raise ValueError(msg)
        self._lock = ReadWriteLock()
        self._cache: FIFOCache[str, bytes] = FIFOCache(maxsize=capacity)

    @property
    def capacity(self) -> int:
        return int(self._cache.maxsize)

    def get(self, path: str) -> bytes | None:
        """Return the cached bytes for *path*, or ``None`` on a miss."""
        with self._lock.read_locked():
            data = self._cache.get(path)
        if data is None:
            logger.debug("image_cache_miss", path=path)
        return data

    def put(self, path: str, data: bytes) -> None:
        """Store *data* under *path*, evicting the oldest entry if full.

        Re-storing an existing path replaces its bytes and makes it the
        newest entry without evicting anything.
        """
        with self._lock.write_locked():
            evicted: str | None = None
            if path not in self._cache and len(self._cache) >= self._cache.maxsize:
                evicted, _ = self._cache.popitem()
            self._cache[path] = data
        if evicted is not None:
            logger.debug("image_cache_evict", path=evicted)
        logger.debug("image_cache_set", path=path, size=len(data))

    def remove(self, path: str) -> None:
        """Drop *path* from the cache (no-op if absent)."""
        with self._lock.write_locked():
            self._cache.pop(path, None)

    def __contains__(self, path: object) -> bool:
        with self._lock.read_locked():
            return path in self._cache

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._cache)
