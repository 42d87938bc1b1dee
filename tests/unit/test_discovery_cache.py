"""Unit tests for the name-keyed discovery cache."""

from __future__ import annotations

from pathlib import Path

from idebridge.discovery.cache import DiscoveryCache


def test_cache_keys_entries_by_normalized_name() -> None:
    """Lookups should ignore case and surrounding whitespace of the name."""

    cache = DiscoveryCache()
    cache.put("TCSAS-Devtools", Path("/Applications/TCSAS-Devtools.app"))

    assert cache.get(" tcsas-devtools ") == Path("/Applications/TCSAS-Devtools.app")
    assert "TCSAS-DEVTOOLS" in cache
    assert len(cache) == 1


def test_cache_keeps_distinct_applications_apart() -> None:
    """Different target names must never share a cache slot."""

    cache = DiscoveryCache()
    cache.put("Alpha", Path("/opt/alpha"))
    cache.put("Beta", Path("/opt/beta"))

    assert cache.get("Alpha") == Path("/opt/alpha")
    assert cache.get("Beta") == Path("/opt/beta")


def test_cache_ignores_empty_results_and_supports_eviction() -> None:
    """Empty results are never stored and eviction drops a single entry."""

    cache = DiscoveryCache()
    cache.put("Alpha", None)
    assert cache.get("Alpha") is None
    assert len(cache) == 0

    cache.put("Alpha", Path("/opt/alpha"))
    cache.evict("ALPHA")
    cache.evict("never-stored")

    assert "Alpha" not in cache
    assert 42 not in cache
