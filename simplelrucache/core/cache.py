"""LRU cache policy core.

:class:`LruCache` implements the public cache operations on top of an
:class:`~simplelrucache.storage.EntryStore`. It owns the entry lifecycle
(creation, validity checks, lazy removal of expired entries and
get-or-compute) and leaves capacity, eviction order and thread safety to the
store.

Expiration is lazy: there is no background sweep. An expired entry keeps
counting toward ``size()`` until a read observes it and removes it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Hashable
from enum import Enum
from typing import Callable, Generic, Optional, Tuple, TypeVar

from ..storage import EntryStore
from ..utils.singleflight import KeyedLocks
from .entry import CacheEntry, Clock, EntryFactory, EntryState, strong_entry

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = logging.getLogger(__name__)


class Lookup(Enum):
    """Outcome of reading a key without side effects."""

    HIT = "hit"
    EXPIRED = "expired"
    MISS = "miss"


class LruCache(Generic[K, V]):
    """Size-bounded cache with per-entry TTL.

    Parameters
    ----------
    store: EntryStore
        Keyed storage backend. Its capacity and eviction policy apply.
    ttl: float
        Default time-to-live in seconds. Must be strictly positive.
    entry_factory: EntryFactory
        Builds entries for stored values; ``strong_entry`` by default.
    clock: Clock
        Time source in seconds, ``time.monotonic`` by default.
    compute_once: bool
        When True, concurrent get-or-compute calls for the same key run the
        supplier at most once per miss. When False (default) the supplier may
        run once per racing caller and the last write wins.
    name: str
        Identifier used in log records.

    Raises
    ------
    ValueError
        If ``ttl`` is not strictly positive.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        store: EntryStore[K, V],
        ttl: float,
        *,
        entry_factory: EntryFactory = strong_entry,
        clock: Clock = time.monotonic,
        compute_once: bool = False,
        name: str = "default",
    ) -> None:
        # NaN must fail this check as well
        if not ttl > 0:
            raise ValueError("ttl must be positive")
        self._store = store
        self._ttl = ttl
        self._entry_factory = entry_factory
        self._clock = clock
        self._keyed_locks: Optional[KeyedLocks] = (
            KeyedLocks() if compute_once else None
        )
        self.name = name
        logger.info(
            "lru_cache.created",
            extra={"cache": name, "ttl": ttl, "compute_once": compute_once},
        )

    @property
    def ttl(self) -> float:
        """Default time-to-live in seconds."""
        return self._ttl

    def lookup(self, key: K) -> Tuple[Lookup, Optional[V]]:
        """Read ``key`` without removing anything.

        Returns
        -------
        Tuple[Lookup, Optional[V]]
            ``(HIT, value)``, ``(EXPIRED, None)`` or ``(MISS, None)``.
        """
        outcome, value, _ = self._lookup_entry(key)
        return outcome, value

    def _lookup_entry(
        self, key: K
    ) -> Tuple[Lookup, Optional[V], Optional[CacheEntry[V]]]:
        entry = self._store.get_entry(key)
        if entry is None:
            return Lookup.MISS, None, None
        value = entry.value()
        if value is None:
            return Lookup.EXPIRED, None, entry
        return Lookup.HIT, value, entry

    def get(
        self,
        key: K,
        supplier: Optional[Callable[[], V]] = None,
        ttl: Optional[float] = None,
    ) -> Optional[V]:
        """Return the cached value for ``key``.

        Without a supplier this is a plain read: None on a miss, and an
        expired entry is removed from the store as a side effect.

        With a supplier, a miss calls ``supplier()`` once, stores the result
        with ``ttl`` (default TTL when None) and returns it. Exceptions
        raised by the supplier propagate unchanged and nothing is stored.

        Storing goes through the entry factory, so with ``weak_entry`` a
        supplier result that cannot be weakly referenced (``int``, ``str``)
        makes the call raise ``TypeError`` after the supplier has run; the
        result is neither stored nor returned.
        """
        value = self._read(key)
        if value is not None or supplier is None:
            return value
        if self._keyed_locks is None:
            return self._compute(key, supplier, ttl)
        with self._keyed_locks.hold(key):
            # Another caller may have stored the value while we waited
            value = self._read(key)
            if value is not None:
                return value
            return self._compute(key, supplier, ttl)

    def _read(self, key: K) -> Optional[V]:
        outcome, value, entry = self._lookup_entry(key)
        if outcome is Lookup.EXPIRED:
            # Only drop the entry we saw; a concurrent put may have replaced it
            self._store.remove_entry(key, expected=entry)
            logger.debug(
                "lru_cache.expired", extra={"cache": self.name, "key": repr(key)}
            )
        elif outcome is Lookup.MISS:
            logger.debug(
                "lru_cache.miss", extra={"cache": self.name, "key": repr(key)}
            )
        return value

    def _compute(self, key: K, supplier: Callable[[], V], ttl: Optional[float]) -> V:
        logger.debug("lru_cache.compute", extra={"cache": self.name, "key": repr(key)})
        try:
            value = supplier()
        except Exception as exc:
            logger.warning(
                "lru_cache.supplier_failed",
                extra={"cache": self.name, "key": repr(key), "error": str(exc)},
            )
            raise
        self.put(key, value, ttl)
        return value

    def put(self, key: K, value: Optional[V], ttl: Optional[float] = None) -> None:
        """Store ``value`` under ``key``; a None value is ignored."""
        if value is None:
            return
        effective_ttl = self._ttl if ttl is None else ttl
        entry = self._entry_factory(value, effective_ttl, self._clock)
        self._store.put_entry(key, entry)

    def contains(self, key: K) -> bool:
        """True if ``key`` holds a valid entry.

        Goes through :meth:`get` rather than a raw store lookup so that
        expired-but-unpurged entries are reported absent.
        """
        return self.get(key) is not None

    def remove(self, key: K) -> None:
        """Remove ``key``; missing keys are ignored."""
        self._store.remove_entry(key)

    def clear(self) -> None:
        """Remove every entry."""
        self._store.clear()
        logger.debug("lru_cache.cleared", extra={"cache": self.name})

    def size(self) -> int:
        """Number of stored keys, including expired entries not yet purged."""
        return self._store.size()

    def is_empty(self) -> bool:
        return self.size() == 0

    def entry_state(self, key: K) -> Optional[EntryState]:
        """Validity of the stored entry for ``key``, or None if not stored."""
        entry = self._store.get_entry(key)
        return None if entry is None else entry.state()

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"LruCache(name={self.name!r}, ttl={self._ttl}, size={self.size()})"
