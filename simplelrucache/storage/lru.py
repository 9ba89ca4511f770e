"""Bounded LRU entry store.

This module provides a thin, typed wrapper over :class:`cachetools.LRUCache`
implementing the :class:`~simplelrucache.storage.EntryStore` contract. When
the store is full, the least-recently-used key is discarded.

``cachetools`` caches are not thread safe and a plain read reorders the
recency list, so every access goes through a single re-entrant lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable
from typing import Generic, Optional, Tuple, TypeVar

from cachetools import LRUCache  # type: ignore[import-untyped]

from ..core.entry import CacheEntry

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = logging.getLogger(__name__)


class _EvictionLoggingLRUCache(LRUCache):
    """LRUCache that reports capacity evictions."""

    def __init__(self, maxsize: int, name: str) -> None:
        super().__init__(maxsize=maxsize)
        self._name = name

    def popitem(self) -> Tuple[object, object]:
        key, entry = super().popitem()
        logger.debug(
            "lru_store.evicted",
            extra={"cache": self._name, "key": repr(key), "maxsize": self.maxsize},
        )
        return key, entry


class LruEntryStore(Generic[K, V]):
    """Thread-safe, capacity-bounded LRU store.

    Parameters
    ----------
    max_size: int
        Maximum number of entries to retain. Must be at least 1.
    name: str
        Identifier used in log records.
    """

    def __init__(self, max_size: int = 1024, name: str = "default") -> None:
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self.max_size = max_size
        self.name = name
        self._entries: LRUCache[K, CacheEntry[V]] = _EvictionLoggingLRUCache(
            maxsize=max_size, name=name
        )
        self._lock = threading.RLock()

    def get_entry(self, key: K) -> Optional[CacheEntry[V]]:
        """Return the entry for ``key`` and mark it most recently used."""
        with self._lock:
            return self._entries.get(key)

    def put_entry(self, key: K, entry: CacheEntry[V]) -> None:
        """Insert or replace ``key``; may evict the least recently used key."""
        with self._lock:
            self._entries[key] = entry

    def remove_entry(
        self, key: K, expected: Optional[CacheEntry[V]] = None
    ) -> None:
        """Drop ``key`` if present; with ``expected``, only if it is still stored."""
        with self._lock:
            if expected is not None and self._entries.get(key) is not expected:
                return
            self._entries.pop(key, None)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        # Raw membership, expired entries included; no recency update
        with self._lock:
            return key in self._entries
