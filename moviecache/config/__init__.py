"""Configuration module -- exports Settings."""

from moviecache.config.settings import Settings

__all__ = ["Settings"]
