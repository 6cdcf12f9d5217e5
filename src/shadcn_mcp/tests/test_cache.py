"""Tests for the TTL response cache."""

import pytest

from conftest import FakeClock
from shadcn_mcp.io.cache import DEFAULT_TTL, ResponseCache


def test_cache_round_trip() -> None:
    """Test set then get within ttl."""
    clock = FakeClock()
    cache = ResponseCache(clock=clock)

    cache.set("k", 42, ttl=1000)
    assert cache.get("k") == 42
    assert "k" in cache
    assert cache.default_ttl == DEFAULT_TTL


def test_cache_expiry() -> None:
    """Test entries disappear once their ttl has elapsed."""
    clock = FakeClock()
    cache = ResponseCache(clock=clock)

    cache.set("k", 42, ttl=1000)
    clock.advance(999)
    assert cache.get("k") == 42

    clock.advance(1)
    assert cache.get("k") is None
    assert cache.size() == 0  # evicted on read


def test_cache_default_ttl() -> None:
    """Test set() without ttl uses the default, which can be changed later."""
    clock = FakeClock()
    cache = ResponseCache(default_ttl=10, clock=clock)

    cache.set("a", "x")
    cache.set_default_ttl(100)
    cache.set("b", "y")

    clock.advance(50)
    assert cache.get("a") is None
    assert cache.get("b") == "y"


def test_cache_non_positive_ttl_never_expires() -> None:
    """Test ttl <= 0 disables expiry."""
    clock = FakeClock()
    cache = ResponseCache(clock=clock)

    cache.set("forever", "v", ttl=0)
    cache.set("also", "v", ttl=-1)
    clock.advance(10**9)

    assert cache.get("forever") == "v"
    assert cache.get("also") == "v"


def test_cache_set_replaces() -> None:
    """Test a second set() overwrites value and restarts the ttl."""
    clock = FakeClock()
    cache = ResponseCache(clock=clock)

    cache.set("k", 1, ttl=10)
    clock.advance(8)
    cache.set("k", 2, ttl=10)
    clock.advance(8)

    assert cache.get("k") == 2


def test_cache_delete() -> None:
    """Test single entry removal."""
    cache = ResponseCache()
    cache.set("component:button", "a")

    assert cache.delete("component:button")
    assert not cache.delete("component:button")
    assert not cache.has("component:button")


def test_cache_delete_by_prefix() -> None:
    """Test dropping every key of one kind."""
    cache = ResponseCache()
    cache.set("component:button", "a")
    cache.set("component:card", "b")
    cache.set("examples:button", "c")

    assert cache.delete_by_prefix("component:") == 2
    assert cache.get("component:button") is None
    assert cache.get("examples:button") == "c"
    assert len(cache) == 1


def test_cache_clear_expired() -> None:
    """Test bulk removal of expired entries and stats."""
    clock = FakeClock()
    cache = ResponseCache(default_ttl=10, clock=clock)
    cache.set("old", 1)
    clock.advance(5)
    cache.set("new", 2)
    clock.advance(6)

    stats = cache.stats()
    assert stats["total_entries"] == 2
    assert stats["expired_entries"] == 1
    assert stats["active_entries"] == 1

    assert cache.clear_expired() == 1
    assert cache.size() == 1
    assert cache.get("new") == 2


def test_cache_clear() -> None:
    """Test clearing the entire cache."""
    cache = ResponseCache()
    cache.set("a", 1)
    cache.set("b", 2)
    cache.clear()

    assert cache.size() == 0


# ═════════════════════════════════════════════════════════════════════════════
# get_or_fetch
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_get_or_fetch_calls_producer_once() -> None:
    """Test a hit within ttl returns the stored value without calling the producer."""
    cache = ResponseCache(clock=FakeClock())
    calls = []

    async def produce() -> list[str]:
        calls.append(1)
        return ["button"]

    first = await cache.get_or_fetch("components:list", produce)
    second = await cache.get_or_fetch("components:list", produce)

    assert first == ["button"]
    assert second is first
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_get_or_fetch_refetches_after_expiry() -> None:
    """Test an expired entry is produced again."""
    clock = FakeClock()
    cache = ResponseCache(clock=clock)
    values = iter(["v1", "v2"])

    async def produce() -> str:
        return next(values)

    assert await cache.get_or_fetch("k", produce, ttl=5) == "v1"
    clock.advance(5)
    assert await cache.get_or_fetch("k", produce, ttl=5) == "v2"


@pytest.mark.asyncio
async def test_get_or_fetch_does_not_cache_failures() -> None:
    """Test a failing producer propagates and leaves the key unset."""
    cache = ResponseCache(clock=FakeClock())

    async def fail() -> str:
        raise RuntimeError("upstream down")

    async def succeed() -> str:
        return "ok"

    with pytest.raises(RuntimeError, match="upstream down"):
        await cache.get_or_fetch("k", fail)
    assert not cache.has("k")
    assert await cache.get_or_fetch("k", succeed) == "ok"
