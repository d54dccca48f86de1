from __future__ import annotations

import asyncio
import sqlite3
from pathlib import Path
from typing import Any

import pytest

from pyalpr.config import AlprConfig
from pyalpr.events import AlertEvent, NoticeKind, StatusNotice
from pyalpr.geometry import Vec3
from pyalpr.registry.lookup import LookupClient
from pyalpr.registry.memory import InMemoryRegistry
from pyalpr.runner import run, start_scanner
from pyalpr.scanner import ScanLoop
from pyalpr.world import SimWorld


def _notices(events: list[AlertEvent]) -> list[NoticeKind]:
    return [e.notice for e in events if isinstance(e, StatusNotice)]


def _empty_db(tmp_path: Path) -> Path:
    path = tmp_path / "alpr.db"
    conn = sqlite3.connect(path)
    try:
        conn.executescript(
            """
            CREATE TABLE peds (id INTEGER PRIMARY KEY, first_name TEXT, last_name TEXT,
                               license_status TEXT, is_wanted INTEGER, is_incarcerated INTEGER);
            CREATE TABLE vehicles (id INTEGER PRIMARY KEY, license_plate TEXT, vehicle_model TEXT,
                                   owner_type TEXT, owner_id INTEGER, registration_expiry TEXT,
                                   insurance_expiry TEXT, is_stolen INTEGER, no_registration INTEGER,
                                   no_insurance INTEGER, is_active INTEGER);
            """
        )
    finally:
        conn.close()
    return path


def test_start_with_sqlite(tmp_path: Path) -> None:
    events: list[AlertEvent] = []

    loop = start_scanner(AlprConfig(database_path=str(_empty_db(tmp_path))), SimWorld(), events.append)

    assert loop is not None
    assert not loop.uses_async_lookup
    assert _notices(events) == [NoticeKind.LOADED]
    loop.close()


def test_start_without_registry_fails_once(caplog: pytest.LogCaptureFixture) -> None:
    events: list[AlertEvent] = []

    loop = start_scanner(AlprConfig(), SimWorld(), events.append)

    assert loop is None
    assert _notices(events) == [NoticeKind.LOAD_FAILED]
    assert "ALPR failed to start" in caplog.text


def test_start_with_missing_database_fails(tmp_path: Path) -> None:
    events: list[AlertEvent] = []

    loop = start_scanner(AlprConfig(database_path=str(tmp_path / "nope.db")), SimWorld(), events.append)

    assert loop is None
    assert _notices(events) == [NoticeKind.LOAD_FAILED]


def test_http_registry_needs_session() -> None:
    events: list[AlertEvent] = []

    loop = start_scanner(AlprConfig(registry_url="http://registry.local"), SimWorld(), events.append)

    assert loop is None
    assert _notices(events) == [NoticeKind.LOAD_FAILED]


def test_http_registry_with_session() -> None:
    session: Any = object()

    loop = start_scanner(AlprConfig(registry_url="http://registry.local"), SimWorld(), http_session=session)

    assert loop is not None
    assert loop.uses_async_lookup


@pytest.mark.asyncio
async def test_run_ticks_until_stopped() -> None:
    world = SimWorld()
    patrol = world.spawn(Vec3(), model_name="police")
    world.seat_observer(patrol)
    world.spawn(Vec3(0.0, 5.0, 0.0), plate="STOLE1")
    registry = InMemoryRegistry([{"license_plate": "STOLE1", "is_stolen": 1}])
    loop = ScanLoop(AlprConfig(), world, LookupClient(registry))
    stop = asyncio.Event()

    task = asyncio.create_task(run(loop, stop, frame_interval=0.001))
    for _ in range(100):
        await asyncio.sleep(0.001)
        if registry.plate_queries:
            break
    stop.set()
    await asyncio.wait_for(task, timeout=1.0)

    assert registry.plate_queries == 1
    # run() tears the loop down on exit.
    assert loop.front is None
    assert len(loop.sink) == 0
