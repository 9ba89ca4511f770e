"""Storage contract consumed by the cache policy core.

A store maps keys to :class:`~simplelrucache.core.entry.CacheEntry` objects
and owns every concern the policy core leaves out: capacity bounds, eviction
order and thread safety. Once a store drops a key (for any reason) it must
return ``None`` from ``get_entry`` for that key.
"""

# pylint: disable=too-few-public-methods

from __future__ import annotations

from collections.abc import Hashable
from typing import Generic, Optional, Protocol, TypeVar

from ..core.entry import CacheEntry

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class EntryStore(Protocol, Generic[K, V]):
    """Keyed entry storage used by :class:`~simplelrucache.core.cache.LruCache`."""

    def get_entry(self, key: K) -> Optional[CacheEntry[V]]:
        """Return the entry stored under ``key`` or None."""
        ...

    def put_entry(self, key: K, entry: CacheEntry[V]) -> None:
        """Store ``entry`` under ``key``, replacing any previous entry."""
        ...

    def remove_entry(
        self, key: K, expected: Optional[CacheEntry[V]] = None
    ) -> None:
        """Drop ``key`` if present.

        When ``expected`` is given, drop it only if ``expected`` is still the
        entry stored under ``key``.
        """
        ...

    def size(self) -> int:
        """Number of keys currently stored, expired or not."""
        ...

    def clear(self) -> None:
        """Drop every key."""
        ...


__all__ = ["EntryStore"]
