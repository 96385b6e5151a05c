"""Unit tests for InMemoryImageCache."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from moviecache.interfaces.image_cache import IImageCache
from moviecache.providers.cache.image_cache import DEFAULT_CAPACITY, InMemoryImageCache


def _fill(cache: InMemoryImageCache, count: int) -> list[str]:
    paths = [f"/posters/{i}.jpg" for i in range(count)]
    for path in paths:
        cache.put(path, path.encode())
    return paths


class TestInMemoryImageCache:
    @pytest.fixture()
    def cache(self) -> InMemoryImageCache:
        return InMemoryImageCache()

    def test_default_capacity_is_50(self, cache: InMemoryImageCache) -> None:
        assert DEFAULT_CAPACITY == 50
        assert cache.capacity == 50

    def test_satisfies_image_cache_protocol(self, cache: InMemoryImageCache) -> None:
        assert isinstance(cache, IImageCache)

    def test_get_missing_returns_none(self, cache: InMemoryImageCache) -> None:
        assert cache.get("/posters/missing.jpg") is None

    def test_put_and_get(self, cache: InMemoryImageCache) -> None:
        cache.put("/posters/1.jpg", b"\xff\xd8jpeg")
        assert cache.get("/posters/1.jpg") == b"\xff\xd8jpeg"
        assert "/posters/1.jpg" in cache

    def test_overwrite_is_last_write_wins(self, cache: InMemoryImageCache) -> None:
        cache.put("/posters/1.jpg", b"old")
        cache.put("/posters/1.jpg", b"new")
        assert cache.get("/posters/1.jpg") == b"new"
        assert len(cache) == 1

    def test_51st_insert_evicts_exactly_one(self, cache: InMemoryImageCache) -> None:
        paths = _fill(cache, 51)
        assert len(cache) == 50
        missing = [p for p in paths if p not in cache]
        assert missing == [paths[0]]

    def test_eviction_is_deterministic(self) -> None:
        first, second = InMemoryImageCache(capacity=5), InMemoryImageCache(capacity=5)
        paths = _fill(first, 8)
        _fill(second, 8)
        assert [p for p in paths if p in first] == [p for p in paths if p in second]
        assert [p for p in paths if p in first] == paths[3:]

    def test_reads_do_not_change_eviction_order(self) -> None:
        cache = InMemoryImageCache(capacity=3)
        paths = _fill(cache, 3)
        cache.get(paths[0])
        cache.put("/posters/new.jpg", b"new")
        assert paths[0] not in cache
        assert paths[1] in cache

    def test_overwrite_at_capacity_does_not_evict(self) -> None:
        cache = InMemoryImageCache(capacity=3)
        paths = _fill(cache, 3)
        cache.put(paths[0], b"refreshed")
        assert len(cache) == 3
        assert all(p in cache for p in paths)
        # The refreshed entry is now the newest, so the next eviction takes paths[1].
        cache.put("/posters/new.jpg", b"new")
        assert paths[1] not in cache
        assert cache.get(paths[0]) == b"refreshed"

    def test_remove(self, cache: InMemoryImageCache) -> None:
        cache.put("/posters/1.jpg", b"x")
        cache.remove("/posters/1.jpg")
        cache.remove("/posters/never.jpg")
        assert cache.get("/posters/1.jpg") is None

    def test_capacity_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="capacity"):
            InMemoryImageCache(capacity=0)

    def test_concurrent_puts_never_exceed_capacity(self) -> None:
        cache = InMemoryImageCache(capacity=20)
        paths = [f"/posters/{i}.jpg" for i in range(200)]
        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda p: cache.put(p, p.encode()), paths))
        assert len(cache) == 20
        for path in paths:
            data = cache.get(path)
            assert data is None or data == path.encode()
