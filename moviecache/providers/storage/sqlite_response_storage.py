"""SQLite-backed movie response storage.

Persists decoded movie pages (keyed by request shape) and per-movie detail
records to a local SQLite database at ``data/movies_cache.db``.  Uses
``aiosqlite`` for async I/O.

Every replacing write is a delete-then-insert inside one transaction, so a
reader never observes two responses for one key and a failure between the
delete and the insert rolls both back.  Writes from one storage instance
are additionally funnelled through a single ``asyncio.Lock``.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Coroutine
from contextlib import asynccontextmanager
import json
from pathlib import Path
from typing import Any

import aiosqlite
import structlog
from pydantic import ValidationError

from moviecache.models.movie import Movie, MovieDetails, MoviesPage, RequestCacheKey
from moviecache.utils.errors import StorageUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "sqlite_response_storage"

_DEFAULT_DB_PATH = Path("data/movies_cache.db")

_CREATE_REQUESTS_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS movies_requests (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    query       TEXT,
    page        INTEGER NOT NULL,
    created_at  TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_CREATE_RESPONSES_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS movies_responses (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    request_id  INTEGER NOT NULL UNIQUE REFERENCES movies_requests(id) ON DELETE CASCADE,
    page        INTEGER NOT NULL,
    total_pages INTEGER NOT NULL
);
"""

_CREATE_RESPONSE_MOVIES_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS response_movies (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    response_id  INTEGER NOT NULL REFERENCES movies_responses(id) ON DELETE CASCADE,
    position     INTEGER NOT NULL,
    movie_id     TEXT    NOT NULL,
    title        TEXT,
    poster_path  TEXT,
    overview     TEXT,
    release_date TEXT,
    vote_average REAL
);
"""

_CREATE_DETAILS_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS movie_details (
    movie_id      INTEGER PRIMARY KEY,
    title         TEXT    NOT NULL,
    overview      TEXT,
    poster_path   TEXT,
    backdrop_path TEXT,
    release_date  TEXT,
    vote_average  REAL,
    vote_count    INTEGER,
    runtime       INTEGER,
    genres        TEXT    NOT NULL DEFAULT '[]',
    updated_at    TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_movies_requests_page_query ON movies_requests(page, query);",
    "CREATE INDEX IF NOT EXISTS idx_response_movies_response ON response_movies(response_id);",
]

# ``IS`` compares NULL equal to NULL, so a page-only key (query NULL) only
# matches page-only requests and never a searched one.
_SELECT_RESPONSE_SQL = """\
SELECT resp.id, resp.page, resp.total_pages
FROM movies_requests req
JOIN movies_responses resp ON resp.request_id = req.id
WHERE req.query IS ? AND req.page = ?
ORDER BY req.id DESC
LIMIT 1;
"""

_SELECT_RESPONSE_MOVIES_SQL = """\
SELECT movie_id, title, poster_path, overview, release_date, vote_average
FROM response_movies
WHERE response_id = ?
ORDER BY position;
"""

_DELETE_REQUESTS_SQL = "DELETE FROM movies_requests WHERE query IS ? AND page = ?;"

_INSERT_REQUEST_SQL = "INSERT INTO movies_requests (query, page) VALUES (?, ?);"

_INSERT_RESPONSE_SQL = """\
INSERT INTO movies_responses (request_id, page, total_pages)
VALUES (?, ?, ?);
"""

_INSERT_RESPONSE_MOVIE_SQL = """\
INSERT INTO response_movies
    (response_id, position, movie_id, title, poster_path, overview, release_date, vote_average)
VALUES (?, ?, ?, ?, ?, ?, ?, ?);
"""

_SELECT_DETAIL_SQL = """\
SELECT movie_id, title, overview, poster_path, backdrop_path, release_date,
       vote_average, vote_count, runtime, genres
FROM movie_details
WHERE movie_id = ?;
"""

_DELETE_DETAIL_SQL = "DELETE FROM movie_details WHERE movie_id = ?;"

_INSERT_DETAIL_SQL = """\
INSERT INTO movie_details
    (movie_id, title, overview, poster_path, backdrop_path, release_date,
     vote_average, vote_count, runtime, genres)
VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
"""


class SQLiteMoviesResponseStorage:
    """Durable implementation of the movie response storage contract.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Parent directories are created
        on :meth:`initialize`.
    """

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)
        self._write_lock = asyncio.Lock()
        self._pending_writes: set[asyncio.Task[None]] = set()
        self._detached_writes: set[asyncio.Task[None]] = set()

    @property
    def db_path(self) -> Path:
        return self._db_path

    async def initialize(self) -> None:
        """Create the request, response, movie and detail tables if they don't exist."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(_CREATE_REQUESTS_TABLE_SQL)
                await db.execute(_CREATE_RESPONSES_TABLE_SQL)
                await db.execute(_CREATE_RESPONSE_MOVIES_TABLE_SQL)
                await db.execute(_CREATE_DETAILS_TABLE_SQL)
                for idx_sql in _CREATE_INDICES_SQL:
                    await db.execute(idx_sql)
                await db.commit()
        except (aiosqlite.Error, OSError) as exc:
            raise self._unavailable("initialize", exc) from exc
        logger.info("movies_cache_db_initialized", path=str(self._db_path))

    # ------------------------------------------------------------------
    # Movie list pages
    # ------------------------------------------------------------------

    async def get_response(self, key: RequestCacheKey) -> MoviesPage | None:
        """Return the page stored for *key*, or ``None`` if nothing is stored."""
        try:
            async with self._connect() as db:
                cursor = await db.execute(_SELECT_RESPONSE_SQL, (key.query, key.page))
                response_row = await cursor.fetchone()
                if response_row is None:
                    logger.debug("cache_miss", query=key.query, page=key.page)
                    return None
                cursor = await db.execute(_SELECT_RESPONSE_MOVIES_SQL, (response_row["id"],))
                movie_rows = await cursor.fetchall()

            page = MoviesPage(
                page=response_row["page"],
                total_pages=response_row["total_pages"],
                movies=[_row_to_movie(row) for row in movie_rows],
            )
        except (aiosqlite.Error, OSError, ValidationError) as exc:
            raise self._unavailable("get_response", exc) from exc

        logger.debug("cache_hit", query=key.query, page=key.page, movies=len(page.movies))
        return page

    async def save(self, page: MoviesPage, key: RequestCacheKey) -> None:
        """Replace whatever is stored for *key* with *page* in one transaction."""
        # An issued write always completes, even if the caller is cancelled.
        await self._run_shielded(self._save(page, key))

    async def _save(self, page: MoviesPage, key: RequestCacheKey) -> None:
        async with self._write_lock:
            try:
                async with self._connect() as db:
                    try:
                        # Cascades to movies_responses and response_movies.
                        await db.execute(_DELETE_REQUESTS_SQL, (key.query, key.page))
                        cursor = await db.execute(_INSERT_REQUEST_SQL, (key.query, key.page))
                        request_id = cursor.lastrowid
                        cursor = await db.execute(
                            _INSERT_RESPONSE_SQL,
                            (request_id, page.page, page.total_pages),
                        )
                        response_id = cursor.lastrowid
                        await db.executemany(
                            _INSERT_RESPONSE_MOVIE_SQL,
                            [
                                (
                                    response_id,
                                    position,
                                    movie.id,
                                    movie.title,
                                    movie.poster_path,
                                    movie.overview,
                                    movie.release_date.isoformat() if movie.release_date else None,
                                    movie.vote_average,
                                )
                                for position, movie in enumerate(page.movies)
                            ],
                        )
                        await db.commit()
                    except BaseException:
                        await db.rollback()
                        raise
            except (aiosqlite.Error, OSError) as exc:
                raise self._unavailable("save", exc) from exc

        logger.info(
            "response_saved",
            query=key.query,
            page=key.page,
            movies=len(page.movies),
        )

    # ------------------------------------------------------------------
    # Movie details
    # ------------------------------------------------------------------

    async def get_movie_detail(self, movie_id: int) -> MovieDetails | None:
        """Return the stored detail record for *movie_id*, or ``None``."""
        try:
            async with self._connect() as db:
                cursor = await db.execute(_SELECT_DETAIL_SQL, (movie_id,))
                row = await cursor.fetchone()
            if row is None:
                return None
            record: dict[str, Any] = dict(row)
            record["id"] = record.pop("movie_id")
            record["genres"] = json.loads(record["genres"]) if record["genres"] else []
            details = MovieDetails(**record)
        except (aiosqlite.Error, OSError, ValidationError, ValueError) as exc:
            raise self._unavailable("get_movie_detail", exc) from exc
        return details

    async def save_detail(self, details: MovieDetails) -> None:
        """Delete any record for ``details.id`` and insert *details*, atomically."""
        await self._run_shielded(self._save_detail(details))

    async def _save_detail(self, details: MovieDetails) -> None:
        genres_json = json.dumps([genre.model_dump() for genre in details.genres])
        async with self._write_lock:
            try:
                async with self._connect() as db:
                    try:
                        await db.execute(_DELETE_DETAIL_SQL, (details.id,))
                        await db.execute(
                            _INSERT_DETAIL_SQL,
                            (
                                details.id,
                                details.title,
                                details.overview,
                                details.poster_path,
                                details.backdrop_path,
                                details.release_date.isoformat() if details.release_date else None,
                                details.vote_average,
                                details.vote_count,
                                details.runtime,
                                genres_json,
                            ),
                        )
                        await db.commit()
                    except BaseException:
                        await db.rollback()
                        raise
            except (aiosqlite.Error, OSError) as exc:
                raise self._unavailable("save_detail", exc) from exc

        logger.info("movie_detail_saved", movie_id=details.id)

    async def drain(self) -> None:
        """Wait for writes whose callers were cancelled before they finished."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _run_shielded(self, write: Coroutine[Any, Any, None]) -> None:
        """Run *write* as a tracked task that outlives a cancelled caller."""
        task = asyncio.ensure_future(write)
        self._pending_writes.add(task)
        task.add_done_callback(self._write_finished)
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.done():
                self._detached_writes.add(task)
            raise

    def _write_finished(self, task: asyncio.Task[None]) -> None:
        self._pending_writes.discard(task)
        detached = task in self._detached_writes
        self._detached_writes.discard(task)
        if task.cancelled():
            return
        # Retrieving the exception here keeps a detached failure from being
        # reported as "never retrieved"; an awaiting caller still gets it raised.
        exc = task.exception()
        if exc is not None and detached:
            logger.warning(
                "detached_write_finished_with_error",
                path=str(self._db_path),
                error=str(exc),
            )

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection with ``Row`` results and foreign keys enforced.

        The cascading delete in :meth:`save` depends on ``foreign_keys``,
        which SQLite leaves off per connection by default.
        """
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON;")
            yield db

    def _unavailable(self, operation: str, exc: BaseException) -> StorageUnavailableError:
        logger.error(
            "response_storage_error",
            operation=operation,
            path=str(self._db_path),
            error=str(exc),
        )
        return StorageUnavailableError(
            message=f"{operation} failed: {exc}",
            provider_name=_PROVIDER_NAME,
        )

    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
        return _PROVIDER_NAME


def _row_to_movie(row: aiosqlite.Row) -> Movie:
    return Movie(
        id=row["movie_id"],
        title=row["title"],
        poster_path=row["poster_path"],
        overview=row["overview"],
        release_date=row["release_date"],
        vote_average=row["vote_average"],
    )
