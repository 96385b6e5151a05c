"""Movie list and detail repository.

Serves list requests in two steps: a fast ``cached`` callback with whatever
page the response storage already holds, then the authoritative network
result, which is written back under the same key before it is returned.
Detail lookups are cache-first: a stored record is returned without a
network round-trip.

The storage is an accelerator only.  A miss and a
:class:`~moviecache.utils.errors.StorageUnavailableError` both fall back to
the network; storage failures are logged, never raised to the caller.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from moviecache.interfaces.network_service import IMoviesNetworkService
from moviecache.interfaces.response_storage import IMoviesResponseStorage
from moviecache.models.movie import (
    DEFAULT_TIME_WINDOW,
    MovieDetails,
    MoviesPage,
    MoviesRequest,
    RequestCacheKey,
)
from moviecache.utils.errors import StorageUnavailableError

logger = structlog.get_logger(logger_name=__name__)

CachedCallback = Callable[[MoviesPage], None]


class MoviesRepository:
    """Fetches movie pages and details, consulting the response storage first.

    Parameters
    ----------
    network:
        Upstream service returning decoded pages and detail records.
    storage:
        Optional response storage.  When ``None`` every call goes straight
        to the network.
    """

    def __init__(
        self,
        network: IMoviesNetworkService,
        storage: IMoviesResponseStorage | None = None,
    ) -> None:
        self._network = network
        self._storage = storage

    async def fetch_movies_list(
        self,
        query: str,
        page: int,
        cached: CachedCallback | None = None,
    ) -> MoviesPage:
        """Search movies, reporting any cached page through *cached* first."""
        key = RequestCacheKey.for_search(query, page)
        await self._emit_cached(key, cached)

        result = await self._network.search_movies(query, page)
        await self._store_page(key, result)
        return result

    async def fetch_trending_movies_list(
        self,
        request: MoviesRequest,
        cached: CachedCallback | None = None,
    ) -> MoviesPage:
        """Fetch trending movies for ``request.time_window`` (default ``"day"``)."""
        time_window = request.time_window or DEFAULT_TIME_WINDOW
        key = RequestCacheKey.for_trending(time_window, request.page)
        await self._emit_cached(key, cached)

        result = await self._network.trending_movies(time_window, request.page)
        await self._store_page(key, result)
        return result

    async def fetch_movie_details(self, movie_id: int) -> MovieDetails:
        """Return the stored detail record, or fetch and store it on a miss."""
        stored = await self._cache_get_detail(movie_id)
        if stored is not None:
            logger.debug("movie_detail_served_from_cache", movie_id=movie_id)
            return stored

        details = await self._network.movie_details(movie_id)
        await self._cache_set_detail(details)
        return details

    # -- Cache helpers ---------------------------------------------------------

    async def _emit_cached(self, key: RequestCacheKey, cached: CachedCallback | None) -> None:
        if self._storage is None:
            return
        try:
            page = await self._storage.get_response(key)
        except StorageUnavailableError as exc:
            logger.warning("response_storage_unavailable", operation="read", error=str(exc))
            return
        if page is not None and cached is not None:
            cached(page)

    async def _store_page(self, key: RequestCacheKey, page: MoviesPage) -> None:
        if self._storage is None:
            return
        try:
            await self._storage.save(page, key)
        except StorageUnavailableError as exc:
            logger.warning("response_storage_unavailable", operation="write", error=str(exc))

    async def _cache_get_detail(self, movie_id: int) -> MovieDetails | None:
        if self._storage is None:
            return None
        try:
            return await self._storage.get_movie_detail(movie_id)
        except StorageUnavailableError as exc:
            logger.warning("response_storage_unavailable", operation="read_detail", error=str(exc))
            return None

    async def _cache_set_detail(self, details: MovieDetails) -> None:
        if self._storage is None:
            return
        try:
            await self._storage.save_detail(details)
        except StorageUnavailableError as exc:
            logger.warning("response_storage_unavailable", operation="write_detail", error=str(exc))
