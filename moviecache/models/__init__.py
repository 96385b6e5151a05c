"""moviecache domain models -- re-exports all public model classes.

Import from ``moviecache.models`` rather than the individual submodule.
"""

from __future__ import annotations

from moviecache.models.movie import (
    DEFAULT_TIME_WINDOW,
    Genre,
    Movie,
    MovieDetails,
    MoviesPage,
    MoviesRequest,
    RequestCacheKey,
)

__all__ = [
    "DEFAULT_TIME_WINDOW",
    "Genre",
    "Movie",
    "MovieDetails",
    "MoviesPage",
    "MoviesRequest",
    "RequestCacheKey",
]
