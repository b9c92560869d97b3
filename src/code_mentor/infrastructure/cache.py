"""In-process TTL cache with a background sweep task."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from code_mentor.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    data: T
    stored_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


class MemoryCache:
    """Key → value store where every entry expires ``ttl`` seconds after storing.

    Expired entries are dropped lazily on ``get`` and periodically by the
    sweep task started with :meth:`start`.
    """

    def __init__(
        self,
        default_ttl: float = 300.0,
        sweep_interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if default_ttl < 0:
            raise ConfigurationError(f"Cache TTL must not be negative, got {default_ttl}")
        if sweep_interval <= 0:
            raise ConfigurationError(
                f"Cache sweep interval must be positive, got {sweep_interval}"
            )
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._default_ttl = default_ttl
        self._sweep_interval = sweep_interval
        self._clock = clock
        self._sweeper: asyncio.Task[None] | None = None

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None
        if entry.expired(self._clock()):
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None
        logger.debug("Cache hit: %s", key)
        return entry.data

    def set(self, key: str, data: Any, ttl: float | None = None) -> None:
        self._entries[key] = CacheEntry(
            data=data,
            stored_at=self._clock(),
            ttl=self._default_ttl if ttl is None else ttl,
        )
        logger.debug("Cache stored: %s", key)

    def clear(self) -> int:
        size = len(self._entries)
        self._entries.clear()
        logger.info("Cleared cache with %d entries", size)
        return size

    def sweep(self) -> int:
        """Remove every expired entry; return how many were dropped."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))
        return len(expired)

    def stats(self) -> dict[str, Any]:
        now = self._clock()
        return {
            "size": len(self._entries),
            "entries": [
                {"key": k, "age": round(now - e.stored_at, 3), "ttl": e.ttl}
                for k, e in self._entries.items()
            ],
        }

    # ── Lifecycle ───────────────────────────────────────────────────────

    def start(self) -> None:
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.create_task(self._sweep_forever())

    async def stop(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            self.sweep()


class CacheKeys:
    """Builders for the cache key namespaces."""

    @staticmethod
    def file_content(owner: str, repo: str, path: str, branch: str = "main") -> str:
        return f"file:{owner}/{repo}/{branch}:{path}"

    @staticmethod
    def file_list(owner: str, repo: str, path: str = "", branch: str = "main") -> str:
        return f"files:{owner}/{repo}/{branch}:{path}"

    @staticmethod
    def file_analysis(owner: str, repo: str, path: str, branch: str = "main") -> str:
        return f"analysis:{owner}/{repo}/{branch}:{path}"

    @staticmethod
    def repo_analysis(owner: str, repo: str, branch: str = "main") -> str:
        return f"repo-analysis:{owner}/{repo}/{branch}"

    @staticmethod
    def repo_info(owner: str, repo: str) -> str:
        return f"repo-info:{owner}/{repo}"
