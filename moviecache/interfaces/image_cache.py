"""Structural contract for the poster image byte cache."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IImageCache(Protocol):
    """Synchronous path -> bytes cache.  Never raises; a miss is ``None``."""

    def get(self, path: str) -> bytes | None: ...

    def put(self, path: str, data: bytes) -> None: ...
