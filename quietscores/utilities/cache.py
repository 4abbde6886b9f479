"""In-memory TTL cache.

Entries are replaced wholesale on set(); there is no partial merge. Reads
check expiry before returning. Thread-safe so the scoreboard thread pool
can share one instance.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# Standings change slowly; refresh at most every five minutes
CACHE_TTL_STANDINGS = 5 * 60


def make_cache_key(*parts: Any) -> str:
    """Build a cache key like 'standings:nfl'."""
    return ":".join(str(p) for p in parts)


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    fetched_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.fetched_at < self.ttl


class TTLCache:
    """Map from key to {data, fetched_at} with a per-entry time-to-live."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        """Return cached data if present and fresh, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if not entry.is_fresh(self._clock()):
                del self._entries[key]
                self._misses += 1
                logger.debug("[CACHE] Expired: %s", key)
                return None
            self._hits += 1
            return entry.data

    def set(self, key: str, data: Any, ttl: float = CACHE_TTL_STANDINGS) -> None:
        """Store data under key, replacing any previous entry."""
        with self._lock:
            self._entries[key] = CacheEntry(data=data, fetched_at=self._clock(), ttl=ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict:
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
            }
