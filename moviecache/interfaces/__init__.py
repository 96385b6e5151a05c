"""Public interface definitions for the moviecache layer.

Repositories talk to their collaborators only through the contracts defined
here, so backends can be swapped without touching repository code and unit
tests can inject fakes.

    Interface                  ->  Concrete implementations
    ------------------------------------------------------------------
    IMoviesResponseStorage     ->  InMemoryMoviesCache,
                                   SQLiteMoviesResponseStorage
    IImageCache                ->  InMemoryImageCache
    IMoviesNetworkService      ->  (external; supplied by the application)
"""

from moviecache.interfaces.image_cache import IImageCache
from moviecache.interfaces.network_service import IMoviesNetworkService
from moviecache.interfaces.response_storage import IMoviesResponseStorage

__all__ = [
    "IImageCache",
    "IMoviesNetworkService",
    "IMoviesResponseStorage",
]
