"""
Snapshot cache — single in-process slot with stale-if-error fallback.

TTL: 900 seconds (15 minutes) by default.

  - Fresh entry (now - fetched_at < ttl): returned, no upstream call.
  - Missing or expired: one fetch.
      success -> slot replaced wholesale, new snapshot returned
      failure -> previous snapshot returned regardless of age;
                 the error propagates only if nothing was ever cached

There is no lock. Two requests that both find the slot expired each fetch
and the last write wins; the data is the same endpoint and coordinates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable

from services.dashboard.weather.errors import WeatherError
from services.dashboard.weather.models import WeatherSnapshot

logger = logging.getLogger(__name__)

_DEFAULT_TTL_SECONDS = 15 * 60

Clock = Callable[[], datetime]
Fetcher = Callable[[], Awaitable[WeatherSnapshot]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    snapshot: WeatherSnapshot
    fetched_at: datetime


class SnapshotCache:
    """
    Usage:
        cache = SnapshotCache(fetch=client.fetch)
        snapshot = await cache.get_snapshot()
    """

    def __init__(
        self,
        fetch: Fetcher,
        ttl_seconds: int = _DEFAULT_TTL_SECONDS,
        clock: Clock = utc_now,
    ) -> None:
        self._fetch = fetch
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entry: CacheEntry | None = None

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def get(self) -> CacheEntry | None:
        return self._entry

    def set(self, snapshot: WeatherSnapshot, fetched_at: datetime) -> None:
        self._entry = CacheEntry(snapshot=snapshot, fetched_at=fetched_at)

    def clear(self) -> None:
        self._entry = None

    def is_fresh(self, now: datetime) -> bool:
        entry = self._entry
        return entry is not None and now - entry.fetched_at < self._ttl

    async def get_snapshot(self) -> WeatherSnapshot:
        """Return the cached snapshot, refreshing it when expired."""
        now = self._clock()
        entry = self._entry
        if entry is not None and now - entry.fetched_at < self._ttl:
            logger.debug("Weather snapshot cache hit (age=%s)", now - entry.fetched_at)
            return entry.snapshot

        try:
            snapshot = await self._fetch()
        except WeatherError as exc:
            previous = self._entry
            if previous is None:
                raise
            logger.warning(
                "Using expired weather snapshot from %s due to API error: %s",
                previous.fetched_at.isoformat(),
                exc,
            )
            return previous.snapshot

        self.set(snapshot, fetched_at=now)
        logger.debug("Weather snapshot refreshed at %s", now.isoformat())
        return snapshot
