"""Tests for the shared/exclusive lock guarding the room store."""
from __future__ import annotations

import threading
import time

from chatrooms.services.locks import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)
    errors = []

    def reader():
        with lock.read():
            try:
                # Only passes if the other reader is inside at the same time
                both_inside.wait()
            except threading.BrokenBarrierError as e:
                errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert errors == []


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    events = []
    writer_inside = threading.Event()

    def writer():
        with lock.write():
            writer_inside.set()
            time.sleep(0.1)
            events.append("writer done")

    def reader():
        writer_inside.wait()
        with lock.read():
            events.append("reader in")

    w = threading.Thread(target=writer)
    r = threading.Thread(target=reader)
    w.start()
    r.start()
    w.join(timeout=5)
    r.join(timeout=5)

    assert events == ["writer done", "reader in"]


def test_writers_are_mutually_exclusive():
    lock = ReadWriteLock()
    inside = 0
    max_inside = 0
    guard = threading.Lock()

    def writer():
        nonlocal inside, max_inside
        for _ in range(100):
            with lock.write():
                with guard:
                    inside += 1
                    max_inside = max(max_inside, inside)
                with guard:
                    inside -= 1

    threads = [threading.Thread(target=writer) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert max_inside == 1


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    order = []
    writer_waiting = threading.Event()

    lock.acquire_read()

    def writer():
        writer_waiting.set()
        with lock.write():
            order.append("writer")

    def late_reader():
        with lock.read():
            order.append("late reader")

    w = threading.Thread(target=writer)
    w.start()
    writer_waiting.wait()
    # Give the writer time to park on the condition
    time.sleep(0.1)
    r = threading.Thread(target=late_reader)
    r.start()
    time.sleep(0.1)
    assert order == []

    lock.release_read()
    w.join(timeout=5)
    r.join(timeout=5)

    assert order == ["writer", "late reader"]
