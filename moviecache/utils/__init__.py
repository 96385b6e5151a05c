"""Utility modules for moviecache.

- **errors** -- Exception hierarchy rooted at MovieCacheError; storage
  failures are a distinct ``StorageUnavailableError`` so callers can tell
  them apart from a plain miss.
- **concurrency** -- Writer-preferring reader/writer lock guarding the
  in-memory caches.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from moviecache.utils.concurrency import ReadWriteLock
from moviecache.utils.errors import (
    ConfigurationError,
    FetchError,
    MovieCacheError,
    StorageUnavailableError,
)
from moviecache.utils.logging import configure_logging

__all__ = [
    "ConfigurationError",
    "FetchError",
    "MovieCacheError",
    "ReadWriteLock",
    "StorageUnavailableError",
    "configure_logging",
]
