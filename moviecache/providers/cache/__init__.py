"""In-memory cache providers.

InMemoryMoviesCache maps request keys to decoded movie pages (and movie ids
to detail records) for the lifetime of the process.  InMemoryImageCache
holds a bounded set of raw poster bytes.  Neither is shared across
processes; for pages that must survive restarts use the SQLite storage in
``moviecache.providers.storage``.
"""

from moviecache.providers.cache.image_cache import InMemoryImageCache
from moviecache.providers.cache.memory_cache import InMemoryMoviesCache

__all__ = ["InMemoryImageCache", "InMemoryMoviesCache"]
