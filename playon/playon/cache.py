"""
Time-bounded memoization of title lookups.

The cache object is created once by the host application and handed to
whatever needs resolution; there is no module-level instance.
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional

from .models import CacheEntry, MatchCandidate
from .constants import DEFAULT_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


class LookupCache:
    """
    Maps a title string to its last resolution, including "no match".

    Entries older than the TTL are treated as absent; they are replaced on
    the next resolution rather than evicted. All reads and writes go
    through one lock, which is never held while resolving.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.recorded_at < self.ttl_seconds

    def lookup(self, key: str) -> Optional[CacheEntry]:
        """Returns the entry for `key` if it is still within the TTL, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not self._is_fresh(entry, self._clock()):
                return None
            return entry

    def store(self, key: str, value: Optional[MatchCandidate]) -> None:
        """Records `value` for `key`, replacing whatever was there."""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, recorded_at=self._clock())

    def get_or_resolve(
        self,
        key: str,
        resolve_fn: Callable[[], Optional[MatchCandidate]]
    ) -> Optional[MatchCandidate]:
        """
        Returns the cached value for `key`, calling `resolve_fn` on a miss.

        Empty results are cached too. If `resolve_fn` raises, the exception
        propagates and the cache is left untouched.

        Args:
            key: The title string being resolved.
            resolve_fn: Zero-argument callable performing the actual lookup.

        Returns:
            The cached or freshly resolved candidate (None for "no match").
        """
        entry = self.lookup(key)
        if entry is not None:
            logger.debug(f"Cache hit for '{key}'")
            return entry.value

        logger.debug(f"Cache miss for '{key}', resolving")
        value = resolve_fn()
        self.store(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Lookup cache cleared")

    def __contains__(self, key: str) -> bool:
        return self.lookup(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
