"""
Tests for per-key locks and compute-once get-or-compute.
"""

import threading
import time

from simplelrucache.core.cache import LruCache
from simplelrucache.storage.lru import LruEntryStore
from simplelrucache.utils.singleflight import KeyedLocks


def _run_threads(count, target):
    threads = [threading.Thread(target=target) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)


def test_keyed_locks_released_after_use():
    """Test the lock table empties once holders leave."""
    locks = KeyedLocks()
    with locks.hold("a"):
        assert len(locks) == 1
        with locks.hold("b"):
            assert len(locks) == 2
    assert len(locks) == 0


def test_keyed_locks_released_on_error():
    """Test an exception inside the block still releases the lock."""
    locks = KeyedLocks()
    try:
        with locks.hold("a"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert len(locks) == 0
    with locks.hold("a"):
        pass


def test_keyed_locks_serialise_same_key():
    """Test two holders of the same key never overlap."""
    locks = KeyedLocks()
    active = []
    overlaps = []
    guard = threading.Lock()

    def worker():
        with locks.hold("k"):
            with guard:
                active.append(1)
                if len(active) > 1:
                    overlaps.append(1)
            time.sleep(0.01)
            with guard:
                active.pop()

    _run_threads(5, worker)
    assert overlaps == []


def test_compute_once_runs_supplier_once():
    """Test racing misses for one key share a single computation."""
    cache = LruCache(LruEntryStore(max_size=8), 60.0, compute_once=True)
    calls = []
    calls_lock = threading.Lock()
    start = threading.Barrier(8)
    results = []

    def supplier():
        with calls_lock:
            calls.append(1)
        time.sleep(0.05)
        return "value"

    def worker():
        start.wait(timeout=5)
        results.append(cache.get("k", supplier))

    _run_threads(8, worker)
    assert len(calls) == 1
    assert results == ["value"] * 8


def test_default_mode_allows_duplicate_computation():
    """Test without compute_once racing misses may each run the supplier."""
    cache = LruCache(LruEntryStore(max_size=8), 60.0)
    inside = threading.Barrier(2)
    calls = []

    def supplier():
        calls.append(1)
        # Both callers must be computing at the same time to pass
        inside.wait(timeout=5)
        return len(calls)

    _run_threads(2, lambda: cache.get("k", supplier))
    assert len(calls) == 2
    assert cache.get("k") in (1, 2)
    assert cache.size() == 1
