"""Thread-level concurrency primitives shared by the in-memory caches.

The caches are read and written from arbitrary worker threads (network
completion callbacks, prefetches).  :class:`ReadWriteLock` gives them the
access discipline they need:

1. **Shared reads** -- any number of readers may hold the lock at once.
2. **Exclusive writes** -- a writer excludes every reader and every other
   writer for the duration of its critical section.
3. **Writer preference** -- once a writer is waiting, new readers queue
   behind it, so a steady stream of reads cannot starve a write.

The lock is not reentrant: a thread holding the read side must not try to
acquire the write side.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Writer-preferring reader/writer lock built on ``threading.Condition``."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared (read) side of the lock for the ``with`` block."""
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive (write) side of the lock for the ``with`` block."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True
        try:
            yield
        finally:
            with self._cond:
                self._writer_active = False
                self._cond.notify_all()

    @property
    def readers(self) -> int:
        """Number of threads currently holding the read side."""
        with self._cond:
            return self._readers

    @property
    def writer_active(self) -> bool:
        with self._cond:
            return self._writer_active
