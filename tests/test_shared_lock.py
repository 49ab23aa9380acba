"""Unit tests for SharedLock, a reader/writer lock whose readers never block."""

import threading
import time

import pytest

from robot_frames.parallelism import SharedLock


def _wait_until(condition, timeout_s: float = 2.0) -> bool:
    """Poll the condition until it holds or the timeout expires."""
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.001)
    return condition()


def test_many_readers_share_the_lock() -> None:
    """Verify that any number of readers can hold the lock at once."""
    lock = SharedLock()

    assert lock.try_acquire_shared()
    assert lock.try_acquire_shared()
    assert lock.num_readers == 2

    lock.release_shared()
    lock.release_shared()
    assert lock.num_readers == 0


def test_reader_attempt_fails_while_writer_holds_lock() -> None:
    """Verify that a shared attempt fails immediately while a writer holds the lock."""
    lock = SharedLock()

    with lock.exclusive():
        assert lock.writer_active
        with lock.shared_attempt() as acquired:
            assert not acquired
        assert lock.num_readers == 0

    with lock.shared_attempt() as acquired:
        assert acquired


def test_writer_waits_for_active_readers() -> None:
    """Verify that a writer times out while a reader holds the lock, then succeeds after."""
    lock = SharedLock()
    assert lock.try_acquire_shared()

    assert not lock.acquire_exclusive(timeout_s=0.05)
    assert lock.writers_waiting == 0

    lock.release_shared()
    assert lock.acquire_exclusive(timeout_s=0.05)
    lock.release_exclusive()


def test_waiting_writer_blocks_new_readers() -> None:
    """Verify that new readers are turned away once a writer is waiting for the lock."""
    lock = SharedLock()
    assert lock.try_acquire_shared()

    writer_done = threading.Event()

    def write() -> None:
        with lock.exclusive():
            writer_done.set()

    writer = threading.Thread(target=write, daemon=True)
    writer.start()

    # Arrange - Wait until the writer is queued behind the active reader
    assert _wait_until(lambda: lock.writers_waiting == 1)

    # Act/Assert - A new reader cannot sneak in ahead of the waiting writer
    assert not lock.try_acquire_shared()
    assert not writer_done.is_set()

    lock.release_shared()
    writer.join(timeout=2.0)
    assert writer_done.is_set()
    assert not lock.writer_active


def test_releasing_unheld_lock_raises() -> None:
    """Verify that releasing access that was never acquired is reported as an error."""
    lock = SharedLock()

    with pytest.raises(RuntimeError):
        lock.release_shared()

    with pytest.raises(RuntimeError):
        lock.release_exclusive()
