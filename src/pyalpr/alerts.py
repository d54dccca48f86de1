"""Alert sink: per-vehicle markers and rate-limited hit notifications."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

from pyalpr._cache import ScanCacheEntry
from pyalpr._constants import MARKER_MAX_AGE, MARKER_RANGE, NOTIFICATION_COOLDOWN
from pyalpr.context import ScanContext
from pyalpr.events import (
    EventListener,
    HitNotification,
    MarkerCreated,
    MarkerRemoved,
    RemovalReason,
    discard,
    publish,
)
from pyalpr.geometry import Vec3
from pyalpr.models.status import AlprStatus, SeverityTier, severity_tier
from pyalpr.world import VehicleHandle, World

_logger = logging.getLogger(__name__)


@dataclass
class AlertMarker:
    marker_id: int
    handle: VehicleHandle
    created_at: float
    status: AlprStatus

    @property
    def tier(self) -> SeverityTier:
        return severity_tier(self.status)

    def age(self, now: float) -> float:
        return now - self.created_at


class AlertSink:
    """Owns the visual markers of flagged vehicles.

    At most one marker exists per vehicle. Markers are removed by
    :meth:`tick` once their vehicle is gone, out of range or the marker
    is too old, and all at once by :meth:`clear`.
    """

    def __init__(
        self,
        listener: EventListener = discard,
        *,
        max_range: float = MARKER_RANGE,
        max_age: float = MARKER_MAX_AGE,
        cooldown: float = NOTIFICATION_COOLDOWN,
        play_sounds: bool = True,
    ) -> None:
        self._listener = listener
        self._max_range = max_range
        self._max_age = max_age
        self._cooldown = cooldown
        self._play_sounds = play_sounds
        self._markers: dict[VehicleHandle, AlertMarker] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._markers)

    def marker(self, handle: VehicleHandle) -> AlertMarker | None:
        return self._markers.get(handle)

    @property
    def markers(self) -> tuple[AlertMarker, ...]:
        return tuple(self._markers.values())

    def on_hit(self, entry: ScanCacheEntry, context: ScanContext, now: float) -> None:
        """Mark a freshly scanned vehicle and try to notify about it."""
        result = entry.result
        if result.status == AlprStatus.CLEAN:
            return
        if entry.handle in self._markers:
            return

        marker = AlertMarker(
            marker_id=next(self._ids),
            handle=entry.handle,
            created_at=now,
            status=result.status,
        )
        self._markers[entry.handle] = marker
        _logger.debug("Marker %d created for %s (%s)", marker.marker_id, result.plate, result.status)
        publish(
            self._listener,
            MarkerCreated(
                marker_id=marker.marker_id,
                handle=entry.handle,
                status=result.status,
                tier=marker.tier,
            ),
        )
        self._notify(entry, context, now)

    def _notify(self, entry: ScanCacheEntry, context: ScanContext, now: float) -> None:
        result = entry.result
        if entry.notification_settled:
            return
        last = context.last_notification_at
        if last is not None and now - last < self._cooldown:
            entry.suppressed = True
            _logger.debug("Notification for %s suppressed by cooldown", result.plate)
            return

        publish(
            self._listener,
            HitNotification(
                handle=entry.handle,
                plate=result.plate,
                alert=result.alert,
                hit_count=result.hit_count,
                status=result.status,
                tier=severity_tier(result.status),
                play_sound=self._play_sounds,
            ),
        )
        entry.notified = True
        context.last_notification_at = now

    def tick(self, world: World, origin: Vec3, now: float) -> list[AlertMarker]:
        """Remove stale markers."""
        removed: list[AlertMarker] = []
        for handle, marker in list(self._markers.items()):
            position = world.position(handle) if world.exists(handle) else None
            if position is None:
                reason = RemovalReason.INVALID
            elif origin.distance_to(position) > self._max_range:
                reason = RemovalReason.OUT_OF_RANGE
            elif marker.age(now) > self._max_age:
                reason = RemovalReason.EXPIRED
            else:
                continue
            self._remove(marker, reason)
            removed.append(marker)
        return removed

    def clear(self) -> None:
        for marker in list(self._markers.values()):
            self._remove(marker, RemovalReason.TEARDOWN)

    def _remove(self, marker: AlertMarker, reason: RemovalReason) -> None:
        del self._markers[marker.handle]
        _logger.debug("Marker %d removed (%s)", marker.marker_id, reason)
        publish(
            self._listener,
            MarkerRemoved(marker_id=marker.marker_id, handle=marker.handle, reason=reason),
        )
