from __future__ import annotations

from datetime import datetime

import pytest

from pyalpr.config import AlprConfig
from pyalpr.events import AlertEvent
from pyalpr.geometry import Vec3
from pyalpr.registry.lookup import LookupClient
from pyalpr.registry.memory import InMemoryRegistry
from pyalpr.scanner import ScanLoop
from pyalpr.world import SimWorld, VehicleHandle

FIXED_NOW = datetime(2026, 6, 1, 12, 0, 0)


class EventLog(list[AlertEvent]):
    """Listener that records every published event."""

    def __call__(self, event: AlertEvent) -> None:
        self.append(event)

    def of(self, kind: type[AlertEvent]) -> list[AlertEvent]:
        return [event for event in self if isinstance(event, kind)]


@pytest.fixture
def events() -> EventLog:
    return EventLog()


@pytest.fixture
def config() -> AlprConfig:
    return AlprConfig()


@pytest.fixture
def world() -> SimWorld:
    return SimWorld()


@pytest.fixture
def patrol(world: SimWorld) -> VehicleHandle:
    """A police car at the origin facing north, with the observer seated in it."""
    handle = world.spawn(Vec3(0.0, 0.0, 0.0), plate="LSPD01", model_name="POLICE2")
    world.seat_observer(handle)
    return handle


@pytest.fixture
def registry() -> InMemoryRegistry:
    return InMemoryRegistry(
        vehicles=[
            {"license_plate": "STOLE1", "is_stolen": 1},
            {"license_plate": "CLEAN1", "registration_expiry": "2030-01-01", "insurance_expiry": "2030-01-01"},
            {"license_plate": "NOREG1", "no_registration": 1},
            {"license_plate": "NOINS1", "no_insurance": "1"},
            {
                "license_plate": "OWNED1",
                "owner_type": "person",
                "ped_id": 7,
                "first_name": "Carmela",
                "last_name": "Soprano",
            },
        ],
        owners=[
            {"id": 7, "first_name": "Carmela", "last_name": "Soprano", "license_status": "Suspended"},
        ],
    )


@pytest.fixture
def loop(config: AlprConfig, world: SimWorld, registry: InMemoryRegistry, events: EventLog) -> ScanLoop:
    return ScanLoop(
        config,
        world,
        LookupClient(registry),
        listener=events,
        clock=lambda: 0.0,
        now_fn=lambda: FIXED_NOW,
    )
