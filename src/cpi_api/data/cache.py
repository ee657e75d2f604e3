"""In-memory cache with absolute expiration for CPI lookups."""

import threading
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any

import structlog
from attrs import define, field

from .endpoints import CACHE_TTL
from .models import CPIData

logger = structlog.get_logger(__name__)


@define(slots=True)
class TTLCache:
    """Thread-safe key/value store whose entries expire at a fixed time.

    Expiry is computed once at insertion; reads do not extend it. Each
    process holds its own instance, so multiple workers may fetch the same
    key independently.
    """

    clock: Callable[[], float] = time.monotonic
    _store: dict[str, tuple[float, Any]] = field(factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(factory=threading.Lock, init=False, repr=False)

    def get(self, key: str) -> Any | None:
        now = self.clock()
        with self._lock:
            item = self._store.get(key)
            if item is None:
                return None
            expires_at, value = item
            if now >= expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: timedelta) -> None:
        expires_at = self.clock() + ttl.total_seconds()
        with self._lock:
            self._store[key] = (expires_at, value)

    def __len__(self) -> int:
        """Number of live entries; expired ones are not counted."""
        now = self.clock()
        with self._lock:
            return sum(1 for expires_at, _ in self._store.values() if now < expires_at)


@define(slots=True)
class CpiCache:
    """Wrap a :class:`TTLCache` with compute-on-miss semantics for CPI results."""

    store: TTLCache = field(factory=TTLCache)
    ttl: timedelta = CACHE_TTL

    def get_or_compute(self, key: str, compute: Callable[[], CPIData]) -> CPIData:
        """Return the cached value for *key*, computing and storing it on a miss.

        Exceptions raised by *compute* propagate and leave the cache untouched.
        Concurrent misses on one key may each run *compute*; the last write wins.
        """
        log = logger.bind(cache_key=key)
        cached = self.store.get(key)
        if cached is not None:
            log.debug("cache.hit")
            return cached
        log.debug("cache.miss")
        value = compute()
        self.store.set(key, value, self.ttl)
        log.debug("cache.stored", ttl_seconds=self.ttl.total_seconds())
        return value


__all__ = ["CpiCache", "TTLCache"]
