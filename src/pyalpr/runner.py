"""Bootstrap and frame driver for hosts without their own game loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from pyalpr.config import AlprConfig
from pyalpr.events import EventListener, NoticeKind, StatusNotice, discard, publish
from pyalpr.exceptions import AlprConfigError
from pyalpr.registry.http import HttpRegistry
from pyalpr.registry.lookup import AsyncLookupClient, LookupClient
from pyalpr.registry.sqlite import SqliteRegistry
from pyalpr.scanner import ScanLoop
from pyalpr.world import World

_logger = logging.getLogger(__name__)

FRAME_INTERVAL = 1.0 / 60.0


def _open_lookup(
    config: AlprConfig,
    http_session: aiohttp.ClientSession | None,
) -> dict[str, Any]:
    if config.database_path:
        return {"lookup": LookupClient(SqliteRegistry(config.database_path))}
    if config.registry_url:
        if http_session is None:
            raise AlprConfigError("registry_url requires an aiohttp session")
        registry = HttpRegistry(config.registry_url, http_session, timeout=config.http_timeout)
        return {"async_lookup": AsyncLookupClient(registry)}
    raise AlprConfigError("No registry configured (set ALPR_DATABASE_PATH or ALPR_REGISTRY_URL)")


def start_scanner(
    config: AlprConfig,
    world: World,
    listener: EventListener = discard,
    *,
    http_session: aiohttp.ClientSession | None = None,
    **loop_kwargs: Any,
) -> ScanLoop | None:
    """Open the configured registry and build a :class:`ScanLoop`.

    A SQLite path wins over an HTTP URL. When neither works the failure is
    logged, a one-time ``LOAD_FAILED`` notice is published and ``None`` is
    returned; there is no retry.
    """
    try:
        clients = _open_lookup(config, http_session)
    except AlprConfigError as exc:
        _logger.error("ALPR failed to start: %s", exc)
        publish(listener, StatusNotice(notice=NoticeKind.LOAD_FAILED, message=f"ALPR unavailable: {exc}"))
        return None

    loop = ScanLoop(config, world, listener=listener, **clients, **loop_kwargs)
    _logger.info("ALPR loaded")
    publish(listener, StatusNotice(notice=NoticeKind.LOADED, message="ALPR loaded"))
    return loop


async def run(
    loop: ScanLoop,
    stop: asyncio.Event,
    *,
    frame_interval: float = FRAME_INTERVAL,
) -> None:
    """Tick ``loop`` once per frame until ``stop`` is set, then tear it down."""
    try:
        while not stop.is_set():
            if loop.uses_async_lookup:
                await loop.tick_async()
            else:
                loop.tick()
            try:
                await asyncio.wait_for(stop.wait(), timeout=frame_interval)
            except TimeoutError:
                pass
    finally:
        loop.close()
