"""
In-memory cache with per-entry time-to-live
Lives as long as the process that owns it; nothing is persisted
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    created_at: float
    expires_at: float


class TTLCache:
    """
    Thread-safe key/value store whose entries expire after a fixed TTL

    Expiry is lazy: an entry is dropped the first time it is read at or
    after its deadline.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Args:
            key: Cache key

        Returns:
            Cached value or None if missing or expired
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if self._clock() >= entry.expires_at:
                del self._entries[key]
                logger.debug(f"Cache entry expired for key: {key}")
                return None

            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Set value in cache

        Args:
            key: Cache key
            value: Value to cache
            ttl: Expiration time in seconds, defaults to the cache TTL
        """
        ttl = self.ttl_seconds if ttl is None else ttl
        now = self._clock()
        with self._lock:
            self._entries[key] = CacheEntry(value=value, created_at=now, expires_at=now + ttl)
        logger.debug(f"Cached value for key: {key} (ttl={ttl}s)")

    def delete(self, key: str) -> bool:
        """Remove a key, returning True if it was present"""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_ttl(self, key: str) -> Optional[float]:
        """
        Get remaining lifetime for a key

        Returns:
            Seconds until expiry or None if the key is missing or expired
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            remaining = entry.expires_at - self._clock()
            return remaining if remaining > 0 else None

    def get_age(self, key: str) -> Optional[float]:
        """Seconds since a live key was set, or None if missing or expired"""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now >= entry.expires_at:
                return None
            return now - entry.created_at

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for entry in self._entries.values() if now < entry.expires_at)
