"""Unit tests for Settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from moviecache.config.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("RESPONSE_STORAGE_BACKEND", "CACHE_DB_PATH", "IMAGE_CACHE_CAPACITY"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.response_storage_backend == "memory"
        assert settings.cache_db_path == "data/movies_cache.db"
        assert settings.image_cache_capacity == 50

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESPONSE_STORAGE_BACKEND", "sqlite")
        monkeypatch.setenv("IMAGE_CACHE_CAPACITY", "12")
        settings = Settings(_env_file=None)
        assert settings.response_storage_backend == "sqlite"
        assert settings.image_cache_capacity == 12

    def test_rejects_unknown_backend(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, response_storage_backend="redis")

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, image_cache_capacity=0)

