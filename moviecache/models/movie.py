"""Movie list, detail and cache-key models for the moviecache layer.

Defines Pydantic v2 models for the decoded results the cache stores and the
keys it indexes them by.  All models use frozen config to enforce
immutability: a later write for the same key replaces the whole value
rather than mutating fields in place.

Key relationships:
    - MoviesPage holds an ordered list of Movie summaries
    - MovieDetails holds a list of Genre records
    - RequestCacheKey identifies which MoviesPage a request maps to
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

# Default trending window when a request does not name one.
DEFAULT_TIME_WINDOW = "day"


# ---------------------------------------------------------------------------
# Cache key
# ---------------------------------------------------------------------------

class RequestCacheKey(BaseModel):
    """Normalized identity of a list request.

    Two keys are equal iff both ``query`` and ``page`` are equal.  ``None``
    and ``""`` are different queries.  Frozen models are hashable, so keys
    can index a dict directly.
    """

    model_config = ConfigDict(frozen=True)

    query: str | None = None
    page: int = Field(ge=1)

    @classmethod
    def for_search(cls, query: str, page: int) -> RequestCacheKey:
        return cls(query=query, page=page)

    @classmethod
    def for_trending(cls, time_window: str | None, page: int) -> RequestCacheKey:
        """Key trending pages by ``"trending_<window>"`` so windows never collide."""
        return cls(query=f"trending_{time_window or DEFAULT_TIME_WINDOW}", page=page)


# ---------------------------------------------------------------------------
# List results
# ---------------------------------------------------------------------------

class Movie(BaseModel):
    """Summary of one movie as it appears in a list page."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str | None = None
    poster_path: str | None = None
    overview: str | None = None
    release_date: date | None = None
    vote_average: float | None = None


class MoviesPage(BaseModel):
    """One decoded page of a list request (search, trending)."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    movies: list[Movie] = Field(default_factory=list)


class MoviesRequest(BaseModel):
    """Request shape accepted by the trending list repository."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    query: str | None = None
    time_window: str | None = None


# ---------------------------------------------------------------------------
# Detail results
# ---------------------------------------------------------------------------

class Genre(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class MovieDetails(BaseModel):
    """Full detail record for a single movie, keyed by ``id``."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    overview: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: date | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    runtime: int | None = None
    genres: list[Genre] = Field(default_factory=list)
