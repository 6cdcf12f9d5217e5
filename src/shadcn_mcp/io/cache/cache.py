"""Keyed response cache with per-entry TTL.

One instance is constructed at startup and injected into every handler, so
all handlers share a single key namespace. Keys are plain strings; handlers
prefix them by kind ("component:", "examples:", ...) so a whole kind can be
dropped with delete_by_prefix().

There is no locking and no de-duplication of concurrent misses: the server
runs on one event loop, and two coroutines missing the same key may both run
the producer. The later write wins.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

DEFAULT_TTL: float = 3600.0  # 1 hour
T = TypeVar("T")

Clock = Callable[[], float]


@dataclass(slots=True)
class CacheEntry(Generic[T]):
    """A cached value with its creation time and lifetime."""
    value: T
    created_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        """ttl <= 0 means the entry never expires."""
        return self.ttl > 0 and now - self.created_at >= self.ttl


class ResponseCache:
    """In-memory TTL cache for upstream responses.

    Args:
        default_ttl: TTL in seconds applied when set()/get_or_fetch() get none
        clock: Time source, monotonic by default (tests pass a fake clock)

    Example:
        >>> cache = ResponseCache(default_ttl=60)
        >>> cache.set("component:button", info)
        >>> cache.get("component:button") is info
        True
        >>> await cache.get_or_fetch("components:list", fetch_list)
    """

    __slots__ = ("_entries", "_default_ttl", "_clock")

    def __init__(self, default_ttl: float = DEFAULT_TTL, *, clock: Clock = time.monotonic) -> None:
        self._entries: dict[str, CacheEntry[object]] = {}
        self._default_ttl = default_ttl
        self._clock = clock

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def set_default_ttl(self, ttl: float) -> None:
        self._default_ttl = ttl

    def get(self, key: str) -> object | None:
        """Cached value, or None if missing or expired. Expired entries are removed."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expired(self._clock()):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl: float | None = None) -> None:
        """Store value under key, replacing any previous entry."""
        self._entries[key] = CacheEntry(
            value=value,
            created_at=self._clock(),
            ttl=self._default_ttl if ttl is None else ttl,
        )

    async def get_or_fetch(self, key: str, producer: Callable[[], Awaitable[T]], ttl: float | None = None) -> T:
        """Return the cached value, or await producer() and cache its result.

        Producer failures propagate and leave the cache untouched.
        """
        if (cached := self.get(key)) is not None:
            return cached  # type: ignore[return-value]
        value = await producer()
        self.set(key, value, ttl)
        return value

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def delete_by_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with prefix. Returns count removed."""
        keys = [k for k in self._entries if k.startswith(prefix)]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()

    def clear_expired(self) -> int:
        """Remove all expired entries. Returns count removed."""
        now = self._clock()
        expired = [k for k, v in self._entries.items() if v.expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet evicted."""
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def stats(self) -> dict[str, object]:
        """Cache statistics for monitoring."""
        now = self._clock()
        expired = sum(1 for v in self._entries.values() if v.expired(now))
        return {
            "total_entries": len(self._entries),
            "expired_entries": expired,
            "active_entries": len(self._entries) - expired,
            "default_ttl": self._default_ttl,
        }
