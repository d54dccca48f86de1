"""Scan loop: the Inactive/Active state machine tying the pipeline together."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime

from pyalpr._cache import ScanCache, ScanCacheEntry
from pyalpr._constants import EMERGENCY_VEHICLE_CLASS, NO_PLATE, QUALIFYING_MODEL_KEYWORDS
from pyalpr.alerts import AlertSink
from pyalpr.config import AlprConfig
from pyalpr.context import ScanContext, ScanState
from pyalpr.events import EventListener, NoticeKind, StatusNotice, discard, publish
from pyalpr.exceptions import AlprConfigError
from pyalpr.models.record import RegistryRecord
from pyalpr.models.result import ScanResult
from pyalpr.normalize import clean_plate
from pyalpr.registry.lookup import AsyncLookupClient, LookupClient
from pyalpr.resolver import resolve
from pyalpr.selector import DirectionalTargets, Target, select_targets
from pyalpr.world import Observer, World

_logger = logging.getLogger(__name__)


def is_qualifying(observer: Observer | None) -> bool:
    """Whether the observer sits in an emergency vehicle."""
    if observer is None or observer.vehicle is None:
        return False
    if observer.vehicle_class.strip().lower() == EMERGENCY_VEHICLE_CLASS:
        return True
    model = observer.model_name.lower()
    return any(keyword in model for keyword in QUALIFYING_MODEL_KEYWORDS)


class ScanLoop:
    """Drive directional scanning from a host frame loop.

    Call :meth:`tick` (or :meth:`tick_async` with an async lookup client)
    once per frame. Eviction runs on every tick; selection and lookups run
    at most once per ``config.scan_interval``.

    Parameters
    ----------
    config : AlprConfig
        Tunables.
    world : World
        Host world the observer and vehicles live in.
    lookup : LookupClient or None
        Synchronous lookup client used by :meth:`tick`.
    async_lookup : AsyncLookupClient or None
        Awaitable lookup client used by :meth:`tick_async`.
    listener : callable
        Receives marker, notification and status events.
    clock : callable
        Monotonic seconds, used when ``now`` is not passed explicitly.
    now_fn : callable
        Wall-clock time for registration/insurance expiry checks.
    """

    def __init__(
        self,
        config: AlprConfig,
        world: World,
        lookup: LookupClient | None = None,
        *,
        async_lookup: AsyncLookupClient | None = None,
        listener: EventListener = discard,
        clock: Callable[[], float] = time.monotonic,
        now_fn: Callable[[], datetime] = datetime.now,
    ) -> None:
        if lookup is None and async_lookup is None:
            raise AlprConfigError("ScanLoop needs a lookup client")
        self._config = config
        self._world = world
        self._lookup = lookup
        self._async_lookup = async_lookup
        self._listener = listener
        self._clock = clock
        self._now_fn = now_fn
        self._context = ScanContext(enabled=config.enabled)
        self._cache = ScanCache(ttl=config.cache_ttl, max_range=config.cache_range)
        self._sink = AlertSink(
            listener,
            max_range=config.marker_range,
            max_age=config.marker_max_age,
            cooldown=config.notification_cooldown,
            play_sounds=config.play_sounds,
        )
        # Bumped on every teardown so in-flight async scans can tell they are stale.
        self._session = 0

    # ------------------------------------------------------------------
    # Presentation state
    # ------------------------------------------------------------------

    @property
    def config(self) -> AlprConfig:
        return self._config

    @property
    def context(self) -> ScanContext:
        return self._context

    @property
    def cache(self) -> ScanCache:
        return self._cache

    @property
    def sink(self) -> AlertSink:
        return self._sink

    @property
    def front(self) -> ScanResult | None:
        return self._context.front

    @property
    def rear(self) -> ScanResult | None:
        return self._context.rear

    @property
    def enabled(self) -> bool:
        return self._context.enabled

    @property
    def state(self) -> ScanState:
        return self._context.state

    @property
    def uses_async_lookup(self) -> bool:
        return self._lookup is None

    # ------------------------------------------------------------------
    # Frame driving
    # ------------------------------------------------------------------

    def tick(self, now: float | None = None) -> None:
        """Run one frame with the synchronous lookup client."""
        if self._lookup is None:
            raise AlprConfigError("tick() needs a synchronous lookup client; use tick_async()")
        if now is None:
            now = self._clock()
        targets = self._begin_frame(now)
        if targets is None:
            return
        self._context.front = self._scan_target(targets.front, now)
        self._context.rear = self._scan_target(targets.rear, now)

    async def tick_async(self, now: float | None = None) -> None:
        """Run one frame, awaiting the async lookup client on cache misses.

        Results are applied only if the loop was not torn down meanwhile
        and the vehicle still exists.
        """
        if self._async_lookup is None:
            raise AlprConfigError("tick_async() needs an async lookup client; use tick()")
        if now is None:
            now = self._clock()
        targets = self._begin_frame(now)
        if targets is None:
            return
        session = self._session
        front = await self._scan_target_async(targets.front, now, session)
        if session != self._session:
            return
        rear = await self._scan_target_async(targets.rear, now, session)
        if session != self._session:
            return
        self._context.front = front
        self._context.rear = rear

    def toggle(self, now: float | None = None) -> bool:
        """Flip the enable flag; returns ``False`` when debounced."""
        if now is None:
            now = self._clock()
        ctx = self._context
        if ctx.last_toggle_at is not None and now - ctx.last_toggle_at < self._config.toggle_debounce:
            _logger.debug("Toggle ignored (debounce)")
            return False
        ctx.last_toggle_at = now
        ctx.enabled = not ctx.enabled
        if not ctx.enabled and ctx.state == ScanState.ACTIVE:
            self.teardown()
        _logger.info("ALPR %s", "enabled" if ctx.enabled else "disabled")
        publish(
            self._listener,
            StatusNotice(
                notice=NoticeKind.ENABLED if ctx.enabled else NoticeKind.DISABLED,
                message="ALPR enabled" if ctx.enabled else "ALPR disabled",
            ),
        )
        return True

    def teardown(self) -> None:
        """Discard results, cache entries and markers; go inactive."""
        self._session += 1
        self._context.clear_results()
        self._cache.clear()
        self._sink.clear()
        self._context.state = ScanState.INACTIVE
        _logger.debug("Scanner torn down")

    def close(self) -> None:
        """Tear down and release the synchronous registry."""
        self.teardown()
        if self._lookup is not None:
            self._lookup.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin_frame(self, now: float) -> DirectionalTargets | None:
        """Update the state machine, evict, and select targets when a scan is due."""
        observer = self._world.observer()
        active = self._context.enabled and is_qualifying(observer)
        if not active:
            if self._context.state == ScanState.ACTIVE:
                _logger.info("Observer left a qualifying vehicle; scanner inactive")
                self.teardown()
            return None
        assert observer is not None
        if self._context.state == ScanState.INACTIVE:
            _logger.info("Scanner active")
            self._context.state = ScanState.ACTIVE

        self._cache.evict(self._world, observer.position)
        self._sink.tick(self._world, observer.position, now)

        last = self._context.last_scan_at
        if last is not None and now - last < self._config.scan_interval:
            return None
        self._context.last_scan_at = now
        return select_targets(
            observer.position,
            observer.forward,
            self._world.vehicles(),
            exclude=observer.vehicle,
            max_range=self._config.scan_range,
            threshold=self._config.alignment_threshold,
        )

    def _scan_target(self, target: Target | None, now: float) -> ScanResult | None:
        if target is None:
            return None
        plate = clean_plate(target.vehicle.plate)

        def on_scan(entry: ScanCacheEntry) -> None:
            self._sink.on_hit(entry, self._context, now)

        return self._cache.get_or_scan(
            target.handle,
            plate,
            target.distance,
            self._scan_plate,
            now,
            on_scan=on_scan,
        )

    async def _scan_target_async(self, target: Target | None, now: float, session: int) -> ScanResult | None:
        if target is None:
            return None
        plate = clean_plate(target.vehicle.plate)
        cached = self._cache.fresh(target.handle, now, target.distance)
        if cached is not None:
            return cached

        result = await self._scan_plate_async(plate, target.distance)
        if session != self._session or not self._world.exists(target.handle):
            _logger.debug("Discarding stale scan of %s", plate)
            return None
        entry = self._cache.store(target.handle, result, now)
        self._sink.on_hit(entry, self._context, now)
        return entry.result

    def _scan_plate(self, plate: str, distance: float) -> ScanResult:
        """Look up and resolve one plate; any failure yields a clean result."""
        assert self._lookup is not None
        try:
            record = self._lookup.fetch(plate) if plate != NO_PLATE else None
            return self._to_result(plate, distance, record)
        except Exception:
            _logger.warning("Lookup of %s failed; treating as clean", plate, exc_info=True)
            return ScanResult.clean(plate, distance)

    async def _scan_plate_async(self, plate: str, distance: float) -> ScanResult:
        assert self._async_lookup is not None
        try:
            record = await self._async_lookup.fetch(plate) if plate != NO_PLATE else None
            return self._to_result(plate, distance, record)
        except Exception:
            _logger.warning("Lookup of %s failed; treating as clean", plate, exc_info=True)
            return ScanResult.clean(plate, distance)

    def _to_result(self, plate: str, distance: float, record: RegistryRecord | None) -> ScanResult:
        resolution = resolve(record, self._now_fn())
        if resolution.hit_count:
            _logger.debug("ALPR hit on %s: %s (%s)", plate, resolution.alert, resolution.status)
        return resolution.to_result(plate, distance)
