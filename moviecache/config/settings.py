"""Application settings loaded from environment variables via pydantic-settings.

Settings are read from two sources, in priority order:

  1. **Environment variables** -- e.g. ``RESPONSE_STORAGE_BACKEND=sqlite``
  2. **.env file** -- key=value lines in the project root ``.env`` file

Field names map to upper-cased environment variable names automatically.
Defaults apply when neither source defines a value.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """moviecache settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Response storage ===
    # "memory" keeps pages for the process lifetime only; "sqlite" persists
    # them to cache_db_path so they survive restarts.
    response_storage_backend: Literal["memory", "sqlite"] = "memory"
    cache_db_path: str = "data/movies_cache.db"

    # === Image cache ===
    image_cache_capacity: int = Field(default=50, ge=1)

    # === App Config ===
    # Read by configure_logging() when build_all() assembles the layer.
    # app_env "production" switches log output to JSON; log_level filters both
    # structlog events and the bridged stdlib handler.
    app_env: str = "development"
    log_level: str = "INFO"
