"""Response caching with TTL support.

Avoids repeated upstream fetches for identical documentation and source reads.
"""

from .cache import DEFAULT_TTL, CacheEntry, Clock, ResponseCache

__all__ = ["ResponseCache", "CacheEntry", "Clock", "DEFAULT_TTL"]
