"""Bounded in-memory response cache with TTL expiry.

Entries expire lazily on lookup and are also swept periodically by a
background asyncio task. When the cache is full the oldest-inserted
entry is evicted.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit

logger = logging.getLogger(__name__)

_CREDENTIAL_PARAM = "apiKey"


@dataclass
class CacheConfig:
    """Configuration for the response cache.

    Args:
        enabled: Store and serve cached responses.
        ttl: Default entry lifetime in seconds.
        max_ttl: Upper bound on any entry lifetime in seconds (``None``
            for no cap).
        max_entries: Maximum number of entries held at once.
        cleanup_interval: Seconds between background expiry sweeps.
    """

    enabled: bool = True
    ttl: float = 600.0
    max_ttl: float | None = None
    max_entries: int = 100
    cleanup_interval: float = 60.0

    @classmethod
    def disabled(cls) -> CacheConfig:
        """Create a configuration that turns caching off.

        Returns:
            A CacheConfig with ``enabled=False``.
        """
        return cls(enabled=False)

    def __str__(self) -> str:
        return (
            f"CacheConfig(enabled={self.enabled}, ttl={self.ttl}, "
            f"max_ttl={self.max_ttl}, max_entries={self.max_entries}, "
            f"cleanup_interval={self.cleanup_interval})"
        )

    def __repr__(self) -> str:
        return self.__str__()


@dataclass
class CacheEntry:
    """A cached value with its storage time and lifetime."""

    value: Any
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


@dataclass
class CacheStats:
    """Snapshot of cache occupancy."""

    total: int
    expired: int
    valid: int
    max_entries: int


def normalize_key(endpoint: str) -> str:
    """Derive a stable cache key from an endpoint path or URL.

    Scheme and host are dropped, the ``apiKey`` credential is removed
    (both as a query parameter and as the trailing ``&apiKey=`` path
    suffix used by the N2YO API) and the remaining query parameters are
    sorted. Applying the function to its own output returns the same key.

    Args:
        endpoint: Relative endpoint (``"tle/25544"``) or absolute URL.

    Returns:
        Key of the form ``/path`` or ``/path?a=1&b=2``.
    """
    parts = urlsplit(endpoint if "://" in endpoint else "/" + endpoint.lstrip("/"))
    path = parts.path.split(f"&{_CREDENTIAL_PARAM}=", 1)[0]
    params = sorted(
        (k, v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if k != _CREDENTIAL_PARAM
    )
    if params:
        return f"{path}?{urlencode(params)}"
    return path


class ResponseCache:
    """In-memory key to value store with per-entry TTL.

    Not thread-safe; intended to be owned by a single client running on
    one event loop.

    Args:
        config: Cache configuration.
        log: Diagnostic hook receiving debug messages. Defaults to this
            module's logger.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        log: Callable[[str], None] | None = None,
    ) -> None:
        self._config = config if config is not None else CacheConfig()
        self._log = log if log is not None else logger.debug
        self._entries: dict[str, CacheEntry] = {}
        self._cleanup_task: asyncio.Task | None = None

    @property
    def config(self) -> CacheConfig:
        return self._config

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        """Return the value stored under *key* if it is still fresh.

        Expired entries are removed and reported as absent.

        Args:
            key: Cache key.

        Returns:
            The cached value, or ``None`` on a miss.
        """
        if not self._config.enabled:
            return None

        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(time.monotonic()):
            self._entries.pop(key, None)
            return None

        self._log(f"[Cache] HIT for: {key}")
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store *value* under *key*.

        The lifetime is *ttl* (or the configured default), capped at
        ``max_ttl`` when one is configured.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Lifetime in seconds.
        """
        if not self._config.enabled:
            return

        effective = ttl if ttl is not None else self._config.ttl
        if self._config.max_ttl is not None:
            effective = min(effective, self._config.max_ttl)

        if key in self._entries:
            del self._entries[key]
        elif len(self._entries) >= self._config.max_entries:
            self._evict_oldest()

        self._entries[key] = CacheEntry(value, time.monotonic(), effective)
        self._log(f"[Cache] Stored response for: {key} (TTL: {effective}s)")

    def _evict_oldest(self) -> None:
        """Remove the first-inserted entry."""
        oldest = next(iter(self._entries), None)
        if oldest is not None:
            self._entries.pop(oldest, None)
            self._log(f"[Cache] Evicted: {oldest}")

    def cleanup(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed.
        """
        now = time.monotonic()
        expired = [k for k, e in list(self._entries.items()) if e.is_expired(now)]
        for key in expired:
            self._entries.pop(key, None)
        if expired:
            self._log(f"[Cache] Cleaned up {len(expired)} expired entries")
        return len(expired)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()
        self._log("[Cache] Cleared")

    def stats(self) -> CacheStats:
        """Return entry counts split into expired and valid."""
        now = time.monotonic()
        expired = sum(1 for e in self._entries.values() if e.is_expired(now))
        total = len(self._entries)
        return CacheStats(
            total=total,
            expired=expired,
            valid=total - expired,
            max_entries=self._config.max_entries,
        )

    # ========================================
    # Background sweep
    # ========================================

    def start(self) -> None:
        """Start the periodic expiry sweep on the running event loop.

        Does nothing when caching is disabled or the sweep is already
        running.

        Raises:
            RuntimeError: If called without a running event loop.
        """
        if not self._config.enabled:
            return
        if self._cleanup_task is not None and not self._cleanup_task.done():
            return
        loop = asyncio.get_running_loop()
        self._cleanup_task = loop.create_task(self._cleanup_loop())

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self._config.cleanup_interval)
            self.cleanup()

    def destroy(self) -> None:
        """Stop the periodic sweep. Safe to call when it never started."""
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            self._cleanup_task = None

    @property
    def sweeping(self) -> bool:
        """Whether the background sweep task is active."""
        return self._cleanup_task is not None and not self._cleanup_task.done()
