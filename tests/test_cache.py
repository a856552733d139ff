"""Tests for the in-memory response cache."""

import asyncio
import time

import pytest

from n2yo import CacheConfig, ResponseCache, normalize_key


class TestCacheConfig:
    """Tests for CacheConfig configuration object."""

    def test_default_values(self):
        config = CacheConfig()
        assert config.enabled is True
        assert config.ttl == 600.0
        assert config.max_ttl is None
        assert config.max_entries == 100
        assert config.cleanup_interval == 60.0

    def test_disabled(self):
        assert CacheConfig.disabled().enabled is False

    def test_repr(self):
        r = repr(CacheConfig(max_entries=7))
        assert "CacheConfig" in r
        assert "max_entries=7" in r

    def test_equality(self):
        assert CacheConfig() == CacheConfig()
        assert CacheConfig() != CacheConfig(ttl=1.0)


class TestNormalizeKey:
    """Tests for cache key derivation."""

    def test_strips_credential_and_host(self):
        relative = normalize_key("positions/25544/41.702/-76.014/0/2/?apiKey=X")
        absolute = normalize_key(
            "https://api.n2yo.com/positions/25544/41.702/-76.014/0/2/?apiKey=X"
        )
        assert relative == "/positions/25544/41.702/-76.014/0/2/"
        assert absolute == relative

    def test_strips_trailing_credential_segment(self):
        assert normalize_key("tle/25544&apiKey=secret") == "/tle/25544"

    def test_parameter_order_independent(self):
        a = normalize_key("above/1/2?b=2&a=1&apiKey=X")
        b = normalize_key("above/1/2?apiKey=Y&a=1&b=2")
        assert a == b == "/above/1/2?a=1&b=2"

    def test_idempotent(self):
        key = normalize_key("/visualpasses/25544/40/-75/0/2/300?z=1&y=2")
        assert normalize_key(key) == key

    def test_leading_slash_optional(self):
        assert normalize_key("tle/25544") == normalize_key("/tle/25544")


class TestResponseCache:
    """Tests for get/set, TTL and eviction."""

    def test_get_missing(self):
        assert ResponseCache().get("nope") is None

    def test_set_then_get(self):
        cache = ResponseCache()
        cache.set("k", {"a": 1})
        assert cache.get("k") == {"a": 1}

    def test_ttl_expiry(self):
        cache = ResponseCache()
        cache.set("k", "v", ttl=0.1)
        assert cache.get("k") == "v"
        time.sleep(0.15)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_default_ttl_used(self):
        cache = ResponseCache(CacheConfig(ttl=0.05))
        cache.set("k", "v")
        time.sleep(0.1)
        assert cache.get("k") is None

    def test_max_ttl_caps_requested_ttl(self):
        cache = ResponseCache(CacheConfig(max_ttl=0.5))
        cache.set("k", "v", ttl=1.0)
        time.sleep(0.3)
        assert cache.get("k") == "v"
        time.sleep(0.3)
        assert cache.get("k") is None

    def test_capacity_evicts_first_inserted(self):
        cache = ResponseCache(CacheConfig(max_entries=2))
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")  # access does not protect from eviction
        cache.set("c", 3)
        assert cache.get("a") is None
        assert cache.get("b") == 2
        assert cache.get("c") == 3

    def test_overwrite_does_not_evict(self):
        cache = ResponseCache(CacheConfig(max_entries=2))
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        assert cache.get("a") == 10
        assert cache.get("b") == 2

    def test_disabled_cache_never_stores(self):
        cache = ResponseCache(CacheConfig.disabled())
        cache.set("k", "v")
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_clear(self):
        cache = ResponseCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0

    def test_cleanup_removes_only_expired(self):
        cache = ResponseCache()
        cache.set("short", 1, ttl=0.05)
        cache.set("long", 2, ttl=60)
        time.sleep(0.1)
        assert cache.cleanup() == 1
        assert cache.get("long") == 2
        assert len(cache) == 1

    def test_stats(self):
        cache = ResponseCache(CacheConfig(max_entries=5))
        cache.set("short", 1, ttl=0.05)
        cache.set("long", 2, ttl=60)
        time.sleep(0.1)
        stats = cache.stats()
        assert stats.total == 2
        assert stats.expired == 1
        assert stats.valid == 1
        assert stats.max_entries == 5

    def test_log_hook_receives_messages(self):
        messages = []
        cache = ResponseCache(log=messages.append)
        cache.set("k", "v")
        cache.get("k")
        assert any("HIT" in m for m in messages)


class TestCleanupTask:
    """Tests for the periodic expiry sweep."""

    def test_destroy_without_start(self):
        cache = ResponseCache()
        cache.destroy()
        assert not cache.sweeping

    def test_start_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            ResponseCache().start()

    def test_sweep_removes_expired_entries(self):
        async def scenario():
            cache = ResponseCache(CacheConfig(cleanup_interval=0.05))
            cache.start()
            cache.set("k", "v", ttl=0.01)
            await asyncio.sleep(0.2)
            remaining = len(cache)
            cache.destroy()
            return remaining, cache.sweeping

        remaining, sweeping = asyncio.run(scenario())
        assert remaining == 0
        assert sweeping is False

    def test_start_is_idempotent(self):
        async def scenario():
            cache = ResponseCache()
            cache.start()
            first = cache._cleanup_task
            cache.start()
            same = cache._cleanup_task is first
            cache.destroy()
            return same

        assert asyncio.run(scenario())

    def test_disabled_cache_does_not_sweep(self):
        async def scenario():
            cache = ResponseCache(CacheConfig.disabled())
            cache.start()
            return cache.sweeping

        assert asyncio.run(scenario()) is False
