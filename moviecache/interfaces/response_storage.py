"""Structural contract for movie response storage backends.

Two backends satisfy this contract: the in-memory
:class:`~moviecache.providers.cache.memory_cache.InMemoryMoviesCache` and
the durable
:class:`~moviecache.providers.storage.sqlite_response_storage.SQLiteMoviesResponseStorage`.
They share no base class; the composition root in ``moviecache.main``
picks one according to ``Settings.response_storage_backend`` and
repositories depend only on this protocol.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from moviecache.models.movie import MovieDetails, MoviesPage, RequestCacheKey


@runtime_checkable
class IMoviesResponseStorage(Protocol):
    """Capability set {get_response, save, get_movie_detail, save_detail}.

    All operations are async because a backend may perform I/O.  A miss
    resolves to ``None``.  Backends that can fail raise
    :class:`~moviecache.utils.errors.StorageUnavailableError`; they never
    raise for a missing key.
    """

    async def get_response(self, key: RequestCacheKey) -> MoviesPage | None:
        """Return the page last saved under *key*, or ``None``."""
        ...

    async def save(self, page: MoviesPage, key: RequestCacheKey) -> None:
        """Replace whatever is stored under *key* with *page*."""
        ...

    async def get_movie_detail(self, movie_id: int) -> MovieDetails | None:
        """Return the detail record for *movie_id*, or ``None``."""
        ...

    async def save_detail(self, details: MovieDetails) -> None:
        """Replace the detail record for ``details.id``."""
        ...
