"""Per-vehicle scan result cache with a time-to-live and range eviction."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pyalpr._constants import CACHE_RANGE, CACHE_TTL
from pyalpr.geometry import Vec3
from pyalpr.models.result import ScanResult
from pyalpr.world import VehicleHandle, World

_logger = logging.getLogger(__name__)


@dataclass
class ScanCacheEntry:
    """Last scan of a single tracked vehicle.

    ``notified`` is set once a hit notification was emitted for this entry,
    ``suppressed`` once one was rate limited. Either way the entry never
    produces another notification while it stays cached; both flags survive
    TTL refreshes.
    """

    handle: VehicleHandle
    result: ScanResult
    scanned_at: float
    notified: bool = False
    suppressed: bool = False

    def age(self, now: float) -> float:
        return now - self.scanned_at

    @property
    def notification_settled(self) -> bool:
        return self.notified or self.suppressed


class ScanCache:
    """Map vehicle handles to their last computed :class:`ScanResult`."""

    def __init__(self, *, ttl: float = CACHE_TTL, max_range: float = CACHE_RANGE) -> None:
        self._ttl = ttl
        self._max_range = max_range
        self._entries: dict[VehicleHandle, ScanCacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, handle: object) -> bool:
        return handle in self._entries

    def entry(self, handle: VehicleHandle) -> ScanCacheEntry | None:
        return self._entries.get(handle)

    def fresh(self, handle: VehicleHandle, now: float, distance: float) -> ScanResult | None:
        """Cached result if still within the TTL, with ``distance`` re-sampled."""
        entry = self._entries.get(handle)
        if entry is None or entry.age(now) >= self._ttl:
            return None
        return entry.result.with_distance(distance)

    def store(self, handle: VehicleHandle, result: ScanResult, now: float) -> ScanCacheEntry:
        """Create the entry, or refresh an expired one in place."""
        entry = self._entries.get(handle)
        if entry is None:
            entry = ScanCacheEntry(handle=handle, result=result, scanned_at=now)
            self._entries[handle] = entry
        else:
            entry.result = result
            entry.scanned_at = now
        return entry

    def get_or_scan(
        self,
        handle: VehicleHandle,
        plate: str,
        distance: float,
        scan: Callable[[str, float], ScanResult],
        now: float,
        *,
        on_scan: Callable[[ScanCacheEntry], None] | None = None,
    ) -> ScanResult:
        """Return the fresh cached result or run ``scan`` and cache its output.

        ``on_scan`` runs after a miss has been written to the cache.
        """
        cached = self.fresh(handle, now, distance)
        if cached is not None:
            _logger.debug("Cache hit for %s (%s)", plate, handle)
            return cached

        _logger.debug("Cache miss for %s (%s)", plate, handle)
        entry = self.store(handle, scan(plate, distance), now)
        if on_scan is not None:
            on_scan(entry)
        return entry.result

    def evict(self, world: World, origin: Vec3) -> list[VehicleHandle]:
        """Drop entries whose vehicle is gone or beyond the cache range."""
        evicted: list[VehicleHandle] = []
        for handle in list(self._entries):
            position = world.position(handle) if world.exists(handle) else None
            if position is None or origin.distance_to(position) > self._max_range:
                del self._entries[handle]
                evicted.append(handle)
        if evicted:
            _logger.debug("Evicted %d cache entries", len(evicted))
        return evicted

    def clear(self) -> None:
        self._entries.clear()
