"""World collaborator interface and an in-memory arena implementation.

Vehicles live in the host world. The scanner only ever holds
:class:`VehicleHandle` values (slot index + generation) and re-validates
them through :meth:`World.exists` / :meth:`World.position` before every
use, since a vehicle can disappear at any time.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from pyalpr.geometry import Vec3

NORTH = Vec3(0.0, 1.0, 0.0)


@dataclass(frozen=True)
class VehicleHandle:
    """Non-owning, generation-checked reference to a world vehicle."""

    index: int
    generation: int


@dataclass(frozen=True, slots=True)
class VehicleSnapshot:
    handle: VehicleHandle
    position: Vec3
    plate: str | None


@dataclass(frozen=True, slots=True)
class Observer:
    """The scanning party as seen at one frame.

    ``vehicle`` is ``None`` when the observer is not inside a vehicle.
    """

    position: Vec3
    forward: Vec3
    vehicle: VehicleHandle | None = None
    vehicle_class: str = ""
    model_name: str = ""


class World(Protocol):
    """Structural interface the scanner consumes from the host."""

    def observer(self) -> Observer | None:
        ...

    def vehicles(self) -> Iterable[VehicleSnapshot]:
        ...

    def exists(self, handle: VehicleHandle) -> bool:
        ...

    def position(self, handle: VehicleHandle) -> Vec3 | None:
        ...


@dataclass
class _Slot:
    generation: int = 0
    alive: bool = False
    position: Vec3 = field(default_factory=Vec3)
    forward: Vec3 = NORTH
    plate: str | None = None
    vehicle_class: str = ""
    model_name: str = ""


class SimWorld:
    """Arena-backed world used by tests, demos and headless hosts.

    Slots are reused after despawn; each reuse bumps the slot generation,
    so handles to the previous occupant stop validating.
    """

    def __init__(self) -> None:
        self._slots: list[_Slot] = []
        self._free: list[int] = []
        self._seated: VehicleHandle | None = None
        self._on_foot: tuple[Vec3, Vec3] | None = None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def spawn(
        self,
        position: Vec3,
        *,
        plate: str | None = None,
        forward: Vec3 = NORTH,
        vehicle_class: str = "",
        model_name: str = "",
    ) -> VehicleHandle:
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
        else:
            index = len(self._slots)
            slot = _Slot()
            self._slots.append(slot)
        slot.alive = True
        slot.position = position
        slot.forward = forward
        slot.plate = plate
        slot.vehicle_class = vehicle_class
        slot.model_name = model_name
        return VehicleHandle(index, slot.generation)

    def despawn(self, handle: VehicleHandle) -> None:
        slot = self._live_slot(handle)
        if slot is None:
            return
        slot.alive = False
        slot.generation += 1
        self._free.append(handle.index)

    def move(self, handle: VehicleHandle, position: Vec3, forward: Vec3 | None = None) -> None:
        slot = self._live_slot(handle)
        if slot is None:
            raise KeyError(f"vehicle {handle} does not exist")
        slot.position = position
        if forward is not None:
            slot.forward = forward

    def seat_observer(self, handle: VehicleHandle) -> None:
        if self._live_slot(handle) is None:
            raise KeyError(f"vehicle {handle} does not exist")
        self._seated = handle
        self._on_foot = None

    def place_observer_on_foot(self, position: Vec3, forward: Vec3 = NORTH) -> None:
        self._seated = None
        self._on_foot = (position, forward)

    # ------------------------------------------------------------------
    # World protocol
    # ------------------------------------------------------------------

    def observer(self) -> Observer | None:
        if self._seated is not None:
            slot = self._live_slot(self._seated)
            if slot is not None:
                return Observer(
                    position=slot.position,
                    forward=slot.forward,
                    vehicle=self._seated,
                    vehicle_class=slot.vehicle_class,
                    model_name=slot.model_name,
                )
            self._seated = None
        if self._on_foot is not None:
            position, forward = self._on_foot
            return Observer(position=position, forward=forward)
        return None

    def vehicles(self) -> list[VehicleSnapshot]:
        return [
            VehicleSnapshot(VehicleHandle(index, slot.generation), slot.position, slot.plate)
            for index, slot in enumerate(self._slots)
            if slot.alive
        ]

    def exists(self, handle: VehicleHandle) -> bool:
        return self._live_slot(handle) is not None

    def position(self, handle: VehicleHandle) -> Vec3 | None:
        slot = self._live_slot(handle)
        return slot.position if slot is not None else None

    def _live_slot(self, handle: VehicleHandle) -> _Slot | None:
        if not 0 <= handle.index < len(self._slots):
            return None
        slot = self._slots[handle.index]
        if not slot.alive or slot.generation != handle.generation:
            return None
        return slot
