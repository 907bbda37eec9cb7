"""Bounded-age snapshot cache in front of a SnapshotSource.

A fetched snapshot is reused until it is ``ttl`` seconds old, so bursts of
API requests within the refresh window hit the exchange once. Failed
fetches are never cached.
"""

import asyncio
import time
from collections.abc import Callable

from scanner.exchange.client import SnapshotSource
from scanner.logging import get_logger
from scanner.models import Snapshot

logger = get_logger(__name__)


class CachedSnapshotSource(SnapshotSource):
    """SnapshotSource decorator with time-based revalidation.

    Args:
        source: The underlying source to fetch from on a miss.
        ttl: Seconds a snapshot stays valid. 0 disables caching.
        clock: Monotonic time function (injectable for tests).
    """

    def __init__(
        self,
        source: SnapshotSource,
        ttl: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._ttl = ttl
        self._clock = clock
        self._snapshot: Snapshot | None = None
        self._fetched_at: float | None = None
        self._lock = asyncio.Lock()

    def age(self) -> float | None:
        """Seconds since the cached snapshot was fetched, or None if empty."""
        if self._fetched_at is None:
            return None
        return self._clock() - self._fetched_at

    def is_stale(self) -> bool:
        age = self.age()
        return age is None or age >= self._ttl

    async def fetch_snapshot(self) -> Snapshot:
        """Return the cached snapshot, fetching a fresh one when stale.

        Concurrent callers during a miss wait on the same lock, so only one
        upstream request is made.
        """
        async with self._lock:
            if self._snapshot is not None and not self.is_stale():
                logger.debug("snapshot_cache_hit", age=round(self.age() or 0.0, 3))
                return self._snapshot

            snapshot = await self._source.fetch_snapshot()
            self._snapshot = snapshot
            self._fetched_at = self._clock()
            return snapshot

    async def close(self) -> None:
        await self._source.close()
