"""In-memory keyed response cache.

Maps a :class:`RequestCacheKey` to the last successfully decoded
:class:`MoviesPage`, and a movie id to its :class:`MovieDetails`.  Fast
but process-local; swap in
:class:`~moviecache.providers.storage.sqlite_response_storage.SQLiteMoviesResponseStorage`
when pages must survive restarts.
"""

from __future__ import annotations

import structlog

from moviecache.models.movie import MovieDetails, MoviesPage, RequestCacheKey
from moviecache.utils.concurrency import ReadWriteLock

logger = structlog.get_logger(logger_name=__name__)


class InMemoryMoviesCache:
    """Thread-safe, last-write-wins page and detail cache.

    Reads take the shared side of a :class:`ReadWriteLock` and proceed in
    parallel; writes take the exclusive side.  Stored values are frozen
    models, so a reader sees either the old page or the new one, never a
    mix.  No operation raises: a miss is ``None``.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._pages: dict[RequestCacheKey, MoviesPage] = {}
        self._details: dict[int, MovieDetails] = {}

    # ------------------------------------------------------------------
    # Synchronous access
    # ------------------------------------------------------------------

    def get(self, key: RequestCacheKey) -> MoviesPage | None:
        """Return the cached page for *key*, or ``None`` on a miss."""
        with self._lock.read_locked():
            page = self._pages.get(key)
        if page is not None:
            logger.debug("cache_hit", query=key.query, page=key.page)
        else:
            logger.debug("cache_miss", query=key.query, page=key.page)
        return page

    def put(self, key: RequestCacheKey, page: MoviesPage) -> None:
        """Store *page* under *key*, replacing any previous page."""
        with self._lock.write_locked():
            self._pages[key] = page
        logger.debug("cache_set", query=key.query, page=key.page, movies=len(page.movies))

    def get_detail(self, movie_id: int) -> MovieDetails | None:
        with self._lock.read_locked():
            return self._details.get(movie_id)

    def put_detail(self, details: MovieDetails) -> None:
        with self._lock.write_locked():
            self._details[details.id] = details
        logger.debug("cache_detail_set", movie_id=details.id)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._pages)

    # ------------------------------------------------------------------
    # IMoviesResponseStorage implementation
    # ------------------------------------------------------------------

    async def get_response(self, key: RequestCacheKey) -> MoviesPage | None:
        return self.get(key)

    async def save(self, page: MoviesPage, key: RequestCacheKey) -> None:
        self.put(key, page)

    async def get_movie_detail(self, movie_id: int) -> MovieDetails | None:
        return self.get_detail(movie_id)

    async def save_detail(self, details: MovieDetails) -> None:
        self.put_detail(details)
