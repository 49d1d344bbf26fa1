"""Tests for the reader-writer lock."""

import threading
import time

import pytest

from installer_l10n.core.locking import ReadWriteLock


def _wait_until(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class TestReadWriteLock:
    """Test shared/exclusive access rules."""

    def test_readers_share(self) -> None:
        """Test several readers hold the lock at once."""
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=2)
        release = threading.Event()

        def reader() -> None:
            with lock.read():
                inside.wait()
                release.wait(2)

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for thread in threads:
            thread.start()
        # Both readers reached the barrier while holding the lock
        inside.wait()
        release.set()
        for thread in threads:
            thread.join(timeout=2)
        assert not any(thread.is_alive() for thread in threads)

    def test_writer_excludes_readers(self) -> None:
        """Test a reader waits while the write lock is held."""
        lock = ReadWriteLock()
        acquired = threading.Event()

        def reader() -> None:
            with lock.read():
                acquired.set()

        with lock.write():
            thread = threading.Thread(target=reader)
            thread.start()
            assert not acquired.wait(0.1)
        assert acquired.wait(2)
        thread.join(timeout=2)

    def test_writers_serialized(self) -> None:
        """Test a second writer waits for the first."""
        lock = ReadWriteLock()
        order: list[str] = []

        def second_writer() -> None:
            with lock.write():
                order.append("second")

        with lock.write():
            thread = threading.Thread(target=second_writer)
            thread.start()
            time.sleep(0.05)
            order.append("first")
        thread.join(timeout=2)

        assert order == ["first", "second"]

    def test_waiting_writer_blocks_new_readers(self) -> None:
        """Test readers arriving behind a waiting writer go after it."""
        lock = ReadWriteLock()
        order: list[str] = []

        def writer() -> None:
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            with lock.read():
                order.append("reader")

        lock.acquire_read()
        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        assert _wait_until(lambda: lock._waiting_writers == 1)

        reader_thread = threading.Thread(target=late_reader)
        reader_thread.start()
        time.sleep(0.05)
        assert order == []

        lock.release_read()
        writer_thread.join(timeout=2)
        reader_thread.join(timeout=2)

        assert order == ["writer", "reader"]

    def test_release_without_acquire(self) -> None:
        """Test unbalanced releases raise RuntimeError."""
        lock = ReadWriteLock()

        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()

    def test_released_on_exception(self) -> None:
        """Test the context managers release when the block raises."""
        lock = ReadWriteLock()

        with pytest.raises(ValueError), lock.write():
            raise ValueError

        acquired = threading.Event()

        def writer() -> None:
            with lock.write():
                acquired.set()

        thread = threading.Thread(target=writer)
        thread.start()
        assert acquired.wait(2)
        thread.join(timeout=2)
