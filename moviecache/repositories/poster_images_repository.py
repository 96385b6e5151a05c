"""Poster image repository.

Returns poster bytes from the in-memory image cache when present and only
downloads on a miss, storing the downloaded bytes for later requests.
"""

from __future__ import annotations

import structlog

from moviecache.interfaces.image_cache import IImageCache
from moviecache.interfaces.network_service import IMoviesNetworkService

logger = structlog.get_logger(logger_name=__name__)


class PosterImagesRepository:
    def __init__(
        self,
        network: IMoviesNetworkService,
        image_cache: IImageCache | None = None,
    ) -> None:
        self._network = network
        self._image_cache = image_cache

    async def fetch_image(self, path: str) -> bytes:
        """Return the poster at *path*, downloading it only on a cache miss."""
        if self._image_cache is not None:
            data = self._image_cache.get(path)
            if data is not None:
                return data

        data = await self._network.poster_image(path)
        if self._image_cache is not None:
            self._image_cache.put(path, data)
        logger.debug("poster_downloaded", path=path, size=len(data))
        return data
