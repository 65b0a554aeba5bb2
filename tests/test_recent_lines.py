"""Tests for the shared rolling window of recent log lines."""

from __future__ import annotations

import threading

import pytest

from slycer.core.recent_lines import RecentLines


def test_keeps_last_five_oldest_first() -> None:
    buffer = RecentLines()
    for i in range(7):
        buffer.append(f"line {i}")

    assert len(buffer) == 5
    assert buffer.snapshot() == ["line 2", "line 3", "line 4", "line 5", "line 6"]


def test_append_returns_snapshot_after_insert() -> None:
    buffer = RecentLines(capacity=2)

    assert buffer.append("a") == ["a"]
    assert buffer.append("b") == ["a", "b"]
    assert buffer.append("c") == ["b", "c"]


def test_snapshot_is_a_copy() -> None:
    buffer = RecentLines()
    buffer.append("a")
    snapshot = buffer.snapshot()
    snapshot.append("mutated")

    assert buffer.snapshot() == ["a"]


def test_clear() -> None:
    buffer = RecentLines()
    buffer.append("a")
    buffer.clear()

    assert len(buffer) == 0
    assert buffer.snapshot() == []


def test_rejects_zero_capacity() -> None:
    with pytest.raises(ValueError):
        RecentLines(capacity=0)


def test_concurrent_appends_never_exceed_capacity() -> None:
    buffer = RecentLines()
    sizes: list[int] = []
    sizes_lock = threading.Lock()

    def writer(name: str) -> None:
        for i in range(2000):
            snapshot = buffer.append(f"{name}-{i}")
            with sizes_lock:
                sizes.append(len(snapshot))

    threads = [threading.Thread(target=writer, args=(n,)) for n in ("out", "err")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert max(sizes) == 5
    assert len(buffer) == 5
    final = buffer.snapshot()
    for name in ("out", "err"):
        own = [int(line.split("-")[1]) for line in final if line.startswith(name)]
        assert own == sorted(own)
