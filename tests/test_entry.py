"""
Tests for cache entries and entry factories.
"""

import gc

import pytest

from simplelrucache.core.entry import (
    CacheEntry,
    EntryState,
    WeakCacheEntry,
    entry_factory_for,
    strong_entry,
    weak_entry,
)


class Payload:
    """Weakly referenceable test value."""

    def __init__(self, label: str) -> None:
        self.label = label


def test_entry_valid_before_deadline(clock):
    """Test value is returned while the clock is before the deadline."""
    entry = CacheEntry("v", 10.0, clock)
    assert entry.expires_at == clock.now + 10.0
    clock.advance(9.999)
    assert entry.value() == "v"
    assert entry.state() is EntryState.VALID


def test_entry_expires_at_deadline(clock):
    """Test the deadline itself is already expired (strict comparison)."""
    entry = CacheEntry("v", 10.0, clock)
    clock.advance(10.0)
    assert entry.value() is None
    assert entry.state() is EntryState.EXPIRED


def test_entry_non_positive_ttl_is_born_expired(clock):
    """Test construction does not validate ttl; the entry is just expired."""
    assert CacheEntry("v", 0, clock).value() is None
    assert CacheEntry("v", -5, clock).value() is None


def test_entry_remaining_never_negative(clock):
    """Test remaining() counts down and clamps at zero."""
    entry = CacheEntry("v", 3.0, clock)
    clock.advance(1.0)
    assert entry.remaining() == pytest.approx(2.0)
    clock.advance(10.0)
    assert entry.remaining() == 0.0


def test_weak_entry_returns_value_while_referenced(clock):
    """Test a weak entry behaves like a strong one while the value lives."""
    payload = Payload("a")
    entry = WeakCacheEntry(payload, 5.0, clock)
    assert entry.value() is payload
    clock.advance(5.0)
    assert entry.value() is None


def test_weak_entry_expires_when_collected(clock):
    """Test a weak entry reads as expired once its referent is collected."""
    payload = Payload("a")
    entry = WeakCacheEntry(payload, 5.0, clock)
    del payload
    gc.collect()
    assert entry.value() is None
    assert entry.state() is EntryState.EXPIRED


def test_weak_entry_rejects_unreferenceable_values(clock):
    """Test builtins such as int cannot be held weakly."""
    with pytest.raises(TypeError):
        WeakCacheEntry(42, 5.0, clock)


def test_entry_factory_lookup():
    """Test factories resolve by name and unknown names are rejected."""
    assert entry_factory_for("strong") is strong_entry
    assert entry_factory_for("weak") is weak_entry
    with pytest.raises(ValueError, match="Unknown reference strength 'soft'"):
        entry_factory_for("soft")


def test_factories_build_matching_entry_types(clock):
    """Test each factory builds the entry type it names."""
    assert type(strong_entry("v", 1.0, clock)) is CacheEntry
    assert isinstance(weak_entry(Payload("x"), 1.0, clock), WeakCacheEntry)
