"""
HolidayCache: in-process, thread-safe cache for upstream responses.

Keys used by the Nager client:
    ("available_countries",)     : the supported-country set
    ("holidays", year, code)     : one holiday list per (year, country)

Entries never expire unless a positive TTL is given. Concurrent misses for the
same key may both run the loader; the last write wins and the stored value is
always a complete result.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Hashable, TypeVar

logger = logging.getLogger("holidays.services.cache")

T = TypeVar("T")

_MISSING = object()


class HolidayCache:

    def __init__(self, ttl_seconds: float = 0, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl   = ttl_seconds
        self._clock = clock
        self._lock  = threading.Lock()
        self._store: dict[Hashable, tuple[float | None, Any]] = {}

    # ── Public API ────────────────────────────────────────────────────────

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            value = self._lookup(key)
        return default if value is _MISSING else value

    def put(self, key: Hashable, value: Any) -> None:
        expires_at = self._clock() + self._ttl if self._ttl > 0 else None
        with self._lock:
            self._store[key] = (expires_at, value)

    def get_or_compute(self, key: Hashable, loader: Callable[[], T]) -> T:
        """
        Return the cached value for key, or run loader() and cache its result.

        The loader runs outside the lock so a slow upstream call never blocks
        readers of other keys. A loader that raises leaves the cache untouched.
        """
        with self._lock:
            value = self._lookup(key)
        if value is not _MISSING:
            logger.debug("cache hit key=%s", key)
            return value

        logger.debug("cache miss key=%s", key)
        value = loader()
        self.put(key, value)
        return value

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return self._lookup(key) is not _MISSING

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for k in list(self._store) if self._lookup(k) is not _MISSING)

    # ── Internal ──────────────────────────────────────────────────────────

    def _lookup(self, key: Hashable) -> Any:
        """Caller must hold the lock. Drops the entry if it has expired."""
        entry = self._store.get(key)
        if entry is None:
            return _MISSING
        expires_at, value = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._store[key]
            return _MISSING
        return value
