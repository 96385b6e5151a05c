"""Durable response storage providers.

SQLiteMoviesResponseStorage keeps movie pages (keyed by request shape) and
per-movie detail records in data/movies_cache.db so they survive process
restarts.  It satisfies the same IMoviesResponseStorage contract as the
in-memory cache and is selected with RESPONSE_STORAGE_BACKEND=sqlite.
"""

from moviecache.providers.storage.sqlite_response_storage import SQLiteMoviesResponseStorage

__all__ = ["SQLiteMoviesResponseStorage"]
