"""
Simple LRU cache package.

An in-process cache with least-recently-used eviction and per-entry
time-to-live expiration. See README.md for usage.
"""

from .__version__ import __version__
from .config.models import CacheConfig, CacheSettings
from .core.cache import Lookup, LruCache
from .core.entry import (
    CacheEntry,
    EntryState,
    WeakCacheEntry,
    entry_factory_for,
    strong_entry,
    weak_entry,
)
from .factory import create_cache
from .storage import EntryStore
from .storage.lru import LruEntryStore

__all__ = [
    "__version__",
    "CacheConfig",
    "CacheEntry",
    "CacheSettings",
    "EntryState",
    "EntryStore",
    "Lookup",
    "LruCache",
    "LruEntryStore",
    "WeakCacheEntry",
    "create_cache",
    "entry_factory_for",
    "strong_entry",
    "weak_entry",
]
