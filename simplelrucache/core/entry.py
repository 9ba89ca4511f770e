"""Cache entries and entry-construction strategies.

A :class:`CacheEntry` pairs a value with an absolute deadline taken from a
clock. Entries never raise on expiry; an expired entry simply stops handing
out its value.

How the value is held is decided by an *entry factory*: ``strong_entry``
keeps a normal reference, ``weak_entry`` keeps a :mod:`weakref` so the cache
does not keep otherwise-unused objects alive.
"""

from __future__ import annotations

import time
import weakref
from enum import Enum
from typing import Callable, Dict, Generic, Optional, TypeVar

V = TypeVar("V")

Clock = Callable[[], float]


class EntryState(Enum):
    """Validity of a stored entry."""

    VALID = "valid"
    EXPIRED = "expired"


class CacheEntry(Generic[V]):
    """Value holder with an expiration deadline.

    Parameters
    ----------
    value: V
        Payload to cache.
    ttl: float
        Seconds the entry stays valid. Not validated here; a non-positive
        ttl yields an entry that is already expired.
    clock: Clock
        Zero-argument callable returning the current time in seconds.
    """

    __slots__ = ("_value", "_clock", "expires_at")

    def __init__(self, value: V, ttl: float, clock: Clock = time.monotonic) -> None:
        self._value = value
        self._clock = clock
        self.expires_at = clock() + ttl

    def _payload(self) -> Optional[V]:
        return self._value

    def state(self) -> EntryState:
        """Return VALID while the clock is strictly before the deadline."""
        if self._clock() < self.expires_at and self._payload() is not None:
            return EntryState.VALID
        return EntryState.EXPIRED

    def value(self) -> Optional[V]:
        """Return the payload, or None once the entry has expired."""
        if self._clock() >= self.expires_at:
            return None
        return self._payload()

    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self.expires_at - self._clock())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(state={self.state().value}, "
            f"expires_at={self.expires_at:.3f})"
        )


class WeakCacheEntry(CacheEntry[V]):
    """Entry that holds its payload through a weak reference.

    The entry reads as expired as soon as the referent is garbage collected.
    """

    __slots__ = ()

    def __init__(self, value: V, ttl: float, clock: Clock = time.monotonic) -> None:
        # weakref.ref raises TypeError for ints, strs and other builtins
        super().__init__(weakref.ref(value), ttl, clock)  # type: ignore[arg-type]

    def _payload(self) -> Optional[V]:
        return self._value()  # type: ignore[operator]


EntryFactory = Callable[[V, float, Clock], CacheEntry[V]]


def strong_entry(value: V, ttl: float, clock: Clock) -> CacheEntry[V]:
    """Build an entry holding a strong reference to ``value``."""
    return CacheEntry(value, ttl, clock)


def weak_entry(value: V, ttl: float, clock: Clock) -> CacheEntry[V]:
    """Build an entry holding a weak reference to ``value``."""
    return WeakCacheEntry(value, ttl, clock)


_FACTORIES: Dict[str, EntryFactory] = {
    "strong": strong_entry,
    "weak": weak_entry,
}


def entry_factory_for(reference: str) -> EntryFactory:
    """Resolve an entry factory by reference strength name.

    Raises
    ------
    ValueError
        If ``reference`` is not a known strength.
    """
    try:
        return _FACTORIES[reference]
    except KeyError:
        known = ", ".join(sorted(_FACTORIES))
        raise ValueError(
            f"Unknown reference strength '{reference}' (expected one of: {known})"
        ) from None
