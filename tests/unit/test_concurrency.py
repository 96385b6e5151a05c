"""Unit tests for the writer-preferring ReadWriteLock."""

from __future__ import annotations

import threading
import time

from moviecache.utils.concurrency import ReadWriteLock


class TestReadWriteLock:
    def test_readers_share_the_lock(self) -> None:
        lock = ReadWriteLock()
        with lock.read_locked():
            with lock.read_locked():
                assert lock.readers == 2
        assert lock.readers == 0

    def test_writer_flag_set_inside_write_block(self) -> None:
        lock = ReadWriteLock()
        with lock.write_locked():
            assert lock.writer_active is True
        assert lock.writer_active is False

    def test_writer_waits_for_active_reader(self) -> None:
        lock = ReadWriteLock()
        events: list[str] = []
        reader_in = threading.Event()
        release_reader = threading.Event()

        def reader() -> None:
            with lock.read_locked():
                reader_in.set()
                release_reader.wait(timeout=5)
                events.append("reader_done")

        def writer() -> None:
            with lock.write_locked():
                events.append("writer")

        t_reader = threading.Thread(target=reader)
        t_reader.start()
        assert reader_in.wait(timeout=5)

        t_writer = threading.Thread(target=writer)
        t_writer.start()
        time.sleep(0.05)
        assert events == []

        release_reader.set()
        t_reader.join(timeout=5)
        t_writer.join(timeout=5)
        assert events == ["reader_done", "writer"]

    def test_reader_waits_for_active_writer(self) -> None:
        lock = ReadWriteLock()
        events: list[str] = []
        writer_in = threading.Event()
        release_writer = threading.Event()

        def writer() -> None:
            with lock.write_locked():
                writer_in.set()
                release_writer.wait(timeout=5)
                events.append("writer_done")

        def reader() -> None:
            with lock.read_locked():
                events.append("reader")

        t_writer = threading.Thread(target=writer)
        t_writer.start()
        assert writer_in.wait(timeout=5)

        t_reader = threading.Thread(target=reader)
        t_reader.start()
        time.sleep(0.05)
        assert events == []

        release_writer.set()
        t_writer.join(timeout=5)
        t_reader.join(timeout=5)
        assert events == ["writer_done", "reader"]

    def test_lock_released_after_exception(self) -> None:
        lock = ReadWriteLock()
        try:
            with lock.write_locked():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        with lock.read_locked():
            assert lock.readers == 1
