"""Composition root for the moviecache layer.

Builds explicitly constructed cache instances and the repositories that use
them.  Nothing here is a module-level singleton: every call to
:func:`build_all` returns a fresh, independent graph, so tests (and multiple
application scopes) never share cache state by accident.
"""

from __future__ import annotations

from typing import Any

import structlog

from moviecache.config.settings import Settings
from moviecache.interfaces.network_service import IMoviesNetworkService
from moviecache.interfaces.response_storage import IMoviesResponseStorage
from moviecache.providers.cache.image_cache import InMemoryImageCache
from moviecache.providers.cache.memory_cache import InMemoryMoviesCache
from moviecache.providers.storage.sqlite_response_storage import SQLiteMoviesResponseStorage
from moviecache.repositories.movies_repository import MoviesRepository
from moviecache.repositories.poster_images_repository import PosterImagesRepository
from moviecache.utils.errors import ConfigurationError
from moviecache.utils.logging import configure_logging

_logger = structlog.get_logger(logger_name=__name__)


# ---------------------------------------------------------------------------
# Backend selection
# ---------------------------------------------------------------------------


def build_response_storage(app_settings: Settings) -> IMoviesResponseStorage:
    """Select the response storage backend named by ``response_storage_backend``."""
    backend = app_settings.response_storage_backend
    if backend == "memory":
        return InMemoryMoviesCache()
    if backend == "sqlite":
        return SQLiteMoviesResponseStorage(db_path=app_settings.cache_db_path)
    msg = f"Unknown response storage backend: {backend!r}"
    raise ConfigurationError(msg)


def build_image_cache(app_settings: Settings) -> InMemoryImageCache:
    return InMemoryImageCache(capacity=app_settings.image_cache_capacity)


# ---------------------------------------------------------------------------
# Full assembly
# ---------------------------------------------------------------------------


def build_all(app_settings: Settings, network: IMoviesNetworkService) -> dict[str, Any]:
    """Construct the caches and repositories around *network*.

    Returns a flat dict of named components.  Call :func:`initialize_all`
    before first use so durable backends can create their schema.
    Logging is configured here from ``log_level`` and ``app_env``.
    """
    configure_logging(app_settings)

    response_storage = build_response_storage(app_settings)
    image_cache = build_image_cache(app_settings)

    _logger.info(
        "moviecache_assembled",
        response_storage=app_settings.response_storage_backend,
        image_cache_capacity=image_cache.capacity,
    )

    return {
        "response_storage": response_storage,
        "image_cache": image_cache,
        "movies_repository": MoviesRepository(network=network, storage=response_storage),
        "poster_images_repository": PosterImagesRepository(
            network=network,
            image_cache=image_cache,
        ),
    }


async def initialize_all(components: dict[str, Any]) -> None:
    """Await ``initialize()`` on every component that defines one."""
    for name, component in components.items():
        initialize = getattr(component, "initialize", None)
        if initialize is None:
            continue
        await initialize()
        _logger.debug("component_initialized", component=name)
