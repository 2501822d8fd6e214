from __future__ import annotations

import threading

import pytest

from pystatetable.config import StateTableConfig
from pystatetable.exceptions import StateTableLockTimeoutError
from pystatetable.state.events import StateChange
from pystatetable.state.store import StateTable


def test_concurrent_writers_notify_once_per_transition() -> None:
    table = StateTable()
    changes: list[StateChange] = []
    changes_lock = threading.Lock()

    def _record(change: StateChange) -> None:
        with changes_lock:
            changes.append(change)

    table.subscribe(_record)
    barrier = threading.Barrier(8)

    def _writer() -> None:
        barrier.wait()
        for i in range(200):
            table.update(f"Room:zone{i % 10}:Level", 42)

    threads = [threading.Thread(target=_writer) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # Every writer writes the same value, so each key transitions exactly once.
    assert len(table) == 10
    assert sorted(change.key for change in changes) == sorted(f"Room:zone{i}:Level" for i in range(10))


def test_readers_see_consistent_listing_while_writing() -> None:
    table = StateTable()
    stop = threading.Event()
    errors: list[BaseException] = []

    def _writer() -> None:
        i = 0
        while not stop.is_set():
            table.update(f"Room:source{i % 50}:Level", i)
            i += 1

    def _reader() -> None:
        try:
            for _ in range(200):
                keys = [record.guid for record in table.list_filtered("level").states]
                assert keys == sorted(keys)
                table.find_by_all_substrings(["source1", "Level"])
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    writer = threading.Thread(target=_writer)
    readers = [threading.Thread(target=_reader) for _ in range(4)]
    writer.start()
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()
    stop.set()
    writer.join()

    assert errors == []


def test_lock_timeout_raises_transient_error() -> None:
    table = StateTable(StateTableConfig(lock_timeout=0.05))
    holding = threading.Event()
    release = threading.Event()

    def _hold_lock() -> None:
        with table._locked():  # noqa: SLF001
            holding.set()
            release.wait(timeout=5.0)

    holder = threading.Thread(target=_hold_lock)
    holder.start()
    holding.wait(timeout=5.0)
    try:
        with pytest.raises(StateTableLockTimeoutError) as excinfo:
            table.update("k", 1)
        assert excinfo.value.timeout == 0.05
        assert isinstance(excinfo.value, TimeoutError)
    finally:
        release.set()
        holder.join()

    assert table.update("k", 1) is True


def test_notifications_follow_write_order_across_threads() -> None:
    table = StateTable()
    observed: list[str] = []
    first_seen = threading.Event()
    release_first = threading.Event()

    def _slow_on_first(change: StateChange) -> None:
        observed.append(change.value)
        if change.value == "1":
            first_seen.set()
            release_first.wait(timeout=5.0)

    table.subscribe(_slow_on_first)

    first = threading.Thread(target=table.update, args=("k", 1))
    first.start()
    assert first_seen.wait(timeout=5.0)

    second = threading.Thread(target=table.update, args=("k", 2))
    second.start()
    # The second writer is parked on the table lock while the first notification runs.
    second.join(timeout=0.1)
    assert second.is_alive()

    release_first.set()
    first.join()
    second.join()

    assert observed == ["1", "2"]
    assert table.get("k") == "2"
