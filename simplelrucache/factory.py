"""Build caches from configuration."""

from __future__ import annotations

import time
from typing import Optional

from .config.models import CacheConfig
from .core.cache import LruCache
from .core.entry import Clock, entry_factory_for
from .storage.lru import LruEntryStore


def create_cache(
    config: Optional[CacheConfig] = None, clock: Clock = time.monotonic
) -> LruCache:
    """Create an :class:`LruCache` backed by an :class:`LruEntryStore`.

    Parameters
    ----------
    config: CacheConfig, optional
        Cache settings; defaults are used if None.
    clock: Clock
        Time source handed to the cache, mainly for tests.
    """
    cfg = config or CacheConfig()
    store: LruEntryStore = LruEntryStore(max_size=cfg.max_size, name=cfg.name)
    return LruCache(
        store,
        cfg.ttl_seconds,
        entry_factory=entry_factory_for(cfg.reference),
        clock=clock,
        compute_once=cfg.compute_once,
        name=cfg.name,
    )
