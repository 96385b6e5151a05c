"""Repositories that put the caches in front of the network service."""

from moviecache.repositories.movies_repository import MoviesRepository
from moviecache.repositories.poster_images_repository import PosterImagesRepository

__all__ = ["MoviesRepository", "PosterImagesRepository"]
