"""
TTL cache for external search results

Entries expire lazily: a stale entry is treated as absent on lookup and is
overwritten by the next store. There is no background sweep and no request
coalescing, so two requests racing on a cold key may both hit the provider
(last write wins).
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from backend_model.config import settings
from backend_model.logger import logger


@dataclass(frozen=True)
class CacheEntry:
    """Cached search payload and the clock reading when it was stored"""
    key: str
    stored_at: float
    payload: Any


class SearchCache:
    """In-process search result cache keyed by query text"""

    KEY_PREFIX = "cse:"

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            ttl: Entry lifetime in seconds (default from settings)
            clock: Source of the current time in seconds
        """
        self.ttl = settings.search_cache_ttl if ttl is None else ttl
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    @classmethod
    def make_key(cls, query: str) -> str:
        return f"{cls.KEY_PREFIX}{query}"

    def lookup(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for key, or None if missing or at least TTL old"""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() - entry.stored_at >= self.ttl:
            logger.debug(f"Search cache entry expired: {key}")
            return None
        return entry

    def store(self, key: str, payload: Any) -> CacheEntry:
        """Insert or overwrite the entry for key, stamped with the current time"""
        entry = CacheEntry(key=key, stored_at=self.clock(), payload=payload)
        self._entries[key] = entry
        return entry

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
