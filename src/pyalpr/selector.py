"""Directional target selection by bearing alignment and range."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pyalpr._constants import ALIGNMENT_THRESHOLD, SCAN_RANGE
from pyalpr.geometry import Vec3
from pyalpr.world import VehicleHandle, VehicleSnapshot

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Target:
    """A selected vehicle with the geometry that won it the slot."""

    vehicle: VehicleSnapshot
    distance: float
    alignment: float

    @property
    def handle(self) -> VehicleHandle:
        return self.vehicle.handle


@dataclass(frozen=True, slots=True)
class DirectionalTargets:
    front: Target | None = None
    rear: Target | None = None


def _beats(candidate: Target, incumbent: Target | None) -> bool:
    if incumbent is None:
        return True
    if candidate.alignment != incumbent.alignment:
        return candidate.alignment > incumbent.alignment
    # Exact alignment tie: the closer vehicle wins, then iteration order.
    return candidate.distance < incumbent.distance


def select_targets(
    origin: Vec3,
    forward: Vec3,
    candidates: Iterable[VehicleSnapshot],
    *,
    exclude: VehicleHandle | None = None,
    max_range: float = SCAN_RANGE,
    threshold: float = ALIGNMENT_THRESHOLD,
) -> DirectionalTargets:
    """Pick the best-aligned vehicle ahead of and behind the observer.

    A candidate qualifies for a slot when it is within ``max_range`` and the
    cosine between the (reversed, for rear) forward vector and the direction
    to it is strictly above ``threshold``. Since the rear alignment is the
    negated front alignment, one vehicle can never hold both slots for any
    non-negative threshold.

    Parameters
    ----------
    origin : Vec3
        Observer position.
    forward : Vec3
        Observer facing; normalized here. A zero vector selects nothing.
    candidates : iterable of VehicleSnapshot
        Nearby vehicles, in world iteration order.
    exclude : VehicleHandle or None
        The observer's own vehicle.
    """
    if forward.length() <= 0.0:
        _logger.debug("Observer has no heading; nothing selected")
        return DirectionalTargets()
    forward = forward.normalized()
    backward = -forward
    front: Target | None = None
    rear: Target | None = None

    for snapshot in candidates:
        if exclude is not None and snapshot.handle == exclude:
            continue
        offset = snapshot.position - origin
        distance = offset.length()
        if distance > max_range or distance <= 0.0:
            continue
        direction = offset.scale(1.0 / distance)

        dot_front = forward.dot(direction)
        if dot_front > threshold:
            candidate = Target(snapshot, distance, dot_front)
            if _beats(candidate, front):
                front = candidate

        dot_rear = backward.dot(direction)
        if dot_rear > threshold:
            candidate = Target(snapshot, distance, dot_rear)
            if _beats(candidate, rear):
                rear = candidate

    _logger.debug(
        "Selected front=%s rear=%s",
        front.handle if front else None,
        rear.handle if rear else None,
    )
    return DirectionalTargets(front=front, rear=rear)
