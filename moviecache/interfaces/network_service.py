"""Abstract base class for the upstream movie network service.

The cache layer does not implement HTTP transport.  It consumes already
decoded results from an object implementing this interface: a page of
movies, a movie detail record, or raw poster bytes.  Concrete adapters
(an HTTP client against the movie metadata API, a test double) are
injected into the repositories at composition time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from moviecache.models.movie import MovieDetails, MoviesPage


class IMoviesNetworkService(ABC):
    """Contract for fetching decoded movie data from the upstream API.

    Implementations raise :class:`~moviecache.utils.errors.FetchError` when
    the fetch fails.
    """

    @abstractmethod
    async def search_movies(self, query: str, page: int) -> MoviesPage:
        """Fetch one page of search results for *query*.

        Parameters
        ----------
        query:
            Free-text search query.
        page:
            1-based page number.
        """

    @abstractmethod
    async def trending_movies(self, time_window: str, page: int) -> MoviesPage:
        """Fetch one page of trending movies.

        Parameters
        ----------
        time_window:
            Trending window understood by the API (``"day"`` or ``"week"``).
        page:
            1-based page number.
        """

    @abstractmethod
    async def movie_details(self, movie_id: int) -> MovieDetails:
        """Fetch the full detail record for *movie_id*."""

    @abstractmethod
    async def poster_image(self, path: str) -> bytes:
        """Download the raw encoded bytes of the poster at *path*."""
