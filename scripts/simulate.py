#!/usr/bin/env python3
"""Drive a simulated patrol past a few flagged vehicles.

A patrol car heads north along a road lined with parked and oncoming
vehicles. Every frame the scan loop runs and the overlay plus any
published events are printed.

Usage
-----
::

    python scripts/simulate.py                 # built-in demo registry
    python scripts/simulate.py --db alpr.db    # real SQLite registry
    python scripts/simulate.py -v --frames 600 # debug logging, longer run

Options::

    --db PATH           SQLite registry (default: in-memory demo records)
    --frames N          Frames to simulate (default: 300)
    --fps N             Simulated frames per second (default: 30)
    --speed UNITS       Patrol speed in units per second (default: 12)
    --verbose, -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import logging
import sys

from pyalpr import (
    AlertEvent,
    AlprConfig,
    HitNotification,
    InMemoryRegistry,
    LookupClient,
    MarkerCreated,
    MarkerRemoved,
    ScanLoop,
    SimWorld,
    StatusNotice,
    Vec3,
    start_scanner,
)
from pyalpr.presentation import overlay_lines

DEMO_VEHICLES = [
    {
        "license_plate": "STOLE1",
        "is_stolen": 1,
        "owner_type": "person",
        "ped_id": 1,
        "first_name": "Tony",
        "last_name": "Soprano",
    },
    {"license_plate": "OLDREG", "registration_expiry": "2020-01-01", "insurance_expiry": "2030-01-01"},
    {"license_plate": "NOINS", "no_insurance": 1},
    {"license_plate": "CLEAN1", "registration_expiry": "2030-01-01", "insurance_expiry": "2030-01-01"},
]

DEMO_OWNERS = [
    {"id": 1, "first_name": "Tony", "last_name": "Soprano", "is_wanted": 1, "license_status": "Valid"},
]


def _print_event(event: AlertEvent) -> None:
    if isinstance(event, HitNotification):
        print(f"  >> {event.message.replace(chr(10), ' | ')} [{event.tier.color}]")
    elif isinstance(event, MarkerCreated):
        print(f"  >> marker {event.marker_id} created ({event.status}, {event.tier.color})")
    elif isinstance(event, MarkerRemoved):
        print(f"  >> marker {event.marker_id} removed ({event.reason})")
    elif isinstance(event, StatusNotice):
        print(f"  >> {event.message}")


def _build_world() -> SimWorld:
    world = SimWorld()
    patrol = world.spawn(Vec3(0.0, 0.0, 0.0), plate="LSPD01", model_name="police2")
    world.seat_observer(patrol)
    world.spawn(Vec3(0.5, 30.0, 0.0), plate="STOLE1")
    world.spawn(Vec3(-0.5, 80.0, 0.0), plate="old reg")
    world.spawn(Vec3(0.0, 130.0, 0.0), plate="NOINS")
    world.spawn(Vec3(0.5, 180.0, 0.0), plate="CLEAN1")
    world.spawn(Vec3(0.0, 230.0, 0.0))
    return world


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate a patrol with the ALPR scanner.")
    parser.add_argument("--db", help="SQLite registry (default: in-memory demo records)")
    parser.add_argument("--frames", type=int, default=300, help="Frames to simulate")
    parser.add_argument("--fps", type=float, default=30.0, help="Simulated frames per second")
    parser.add_argument("--speed", type=float, default=12.0, help="Patrol speed in units per second")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    world = _build_world()
    observer = world.observer()
    assert observer is not None and observer.vehicle is not None
    patrol = observer.vehicle

    config = AlprConfig.from_env(database_path=args.db) if args.db else AlprConfig.from_env()
    loop: ScanLoop | None
    if args.db:
        loop = start_scanner(config, world, _print_event)
        if loop is None:
            return 1
    else:
        registry = InMemoryRegistry(DEMO_VEHICLES, DEMO_OWNERS)
        loop = ScanLoop(config, world, LookupClient(registry), listener=_print_event)

    dt = 1.0 / args.fps
    last_lines: list[str] = []
    try:
        for frame in range(args.frames):
            now = frame * dt
            world.move(patrol, Vec3(0.0, args.speed * now, 0.0))
            loop.tick(now)
            lines = [
                line.text
                for line in overlay_lines(loop.front, loop.rear, toggle_key=config.toggle_key, enabled=loop.enabled)
            ]
            if lines != last_lines:
                print(f"t={now:6.2f}s  " + "  |  ".join(lines))
                last_lines = lines
    finally:
        loop.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
