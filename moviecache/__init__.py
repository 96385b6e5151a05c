"""Response caching layer for a movie-browsing client.

Keyed in-memory page cache, bounded poster image cache, and a durable
SQLite page/detail store, plus the repositories that put them in front of
the movie metadata API.
"""

__version__ = "0.1.0"
