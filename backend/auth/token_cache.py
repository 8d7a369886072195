"""Process-wide cache of issued bearer tokens with per-entry expiry."""
import threading
import time
from collections.abc import Callable
from typing import Any, NamedTuple

from cachetools import TLRUCache


class _Entry(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class TokenCache:
    """Set of currently valid token strings. Safe to share between request threads.

    Entries disappear when deleted or when their TTL elapses, whichever comes first.
    The TTL is independent of the token's own exp claim. Each process has its own
    cache, so a token is only valid against the process that issued it.
    """

    def __init__(
        self,
        *,
        default_ttl: float,
        maxsize: int = 10000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self._lock = threading.Lock()
        self._cache: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)

    def insert(self, key: str, value: Any = True, ttl: float | None = None) -> None:
        """Add or replace a token. ttl defaults to the cache-wide default."""
        with self._lock:
            self._cache[key] = _Entry(value, self.default_ttl if ttl is None else ttl)

    def exists(self, key: str) -> bool:
        """True if the token is present and its TTL has not elapsed."""
        with self._lock:
            return key in self._cache

    def delete(self, key: str) -> bool:
        """Remove a token. Returns True if it was present."""
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)
