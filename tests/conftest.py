"""Shared pytest fixtures for the moviecache test suite."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from moviecache.interfaces.network_service import IMoviesNetworkService
from moviecache.models.movie import Genre, Movie, MovieDetails, MoviesPage
from moviecache.providers.storage.sqlite_response_storage import SQLiteMoviesResponseStorage


# ---------------------------------------------------------------------------
# Model builders
# ---------------------------------------------------------------------------


def make_movie(movie_id: str = "603", title: str = "The Matrix", **overrides) -> Movie:
    """Build a Movie summary with realistic defaults."""
    fields = {
        "id": movie_id,
        "title": title,
        "poster_path": f"/posters/{movie_id}.jpg",
        "overview": "A hacker learns the truth about his reality.",
        "release_date": date(1999, 3, 31),
        "vote_average": 8.2,
    }
    fields.update(overrides)
    return Movie(**fields)


def make_page(page: int = 1, total_pages: int = 5, titles: tuple[str, ...] = ("The Matrix", "Heat")) -> MoviesPage:
    """Build a MoviesPage whose movie ids are derived from page and position."""
    movies = [
        make_movie(movie_id=f"{page}{index:02d}", title=title)
        for index, title in enumerate(titles)
    ]
    return MoviesPage(page=page, total_pages=total_pages, movies=movies)


def make_details(movie_id: int = 42, title: str = "Blade Runner", **overrides) -> MovieDetails:
    fields = {
        "id": movie_id,
        "title": title,
        "overview": "A blade runner must pursue and terminate replicants.",
        "poster_path": f"/posters/{movie_id}.jpg",
        "backdrop_path": f"/backdrops/{movie_id}.jpg",
        "release_date": date(1982, 6, 25),
        "vote_average": 7.9,
        "vote_count": 13000,
        "runtime": 117,
        "genres": [Genre(id=878, name="Science Fiction"), Genre(id=18, name="Drama")],
    }
    fields.update(overrides)
    return MovieDetails(**fields)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_page() -> MoviesPage:
    return make_page()


@pytest.fixture
def sample_details() -> MovieDetails:
    return make_details()


@pytest.fixture
def mock_network() -> AsyncMock:
    """AsyncMock network service returning canned pages, details and bytes."""
    network = AsyncMock(spec=IMoviesNetworkService)
    network.search_movies.return_value = make_page(page=1, titles=("Network Result",))
    network.trending_movies.return_value = make_page(page=1, titles=("Trending Result",))
    network.movie_details.return_value = make_details()
    network.poster_image.return_value = b"\x89PNG network bytes"
    return network


@pytest_asyncio.fixture
async def sqlite_storage(tmp_path: Path) -> SQLiteMoviesResponseStorage:
    """Create and initialize a SQLite storage with a temp DB."""
    storage = SQLiteMoviesResponseStorage(db_path=tmp_path / "test_movies_cache.db")
    await storage.initialize()
    return storage
