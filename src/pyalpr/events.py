"""Events published to the audio/visual collaborator.

The scanner never draws or plays anything itself. Marker lifecycle,
hit notifications and user-facing notices are emitted as these frozen
models to a listener callable supplied by the host.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from pyalpr.models.status import AlprStatus, SeverityTier
from pyalpr.world import VehicleHandle

_logger = logging.getLogger(__name__)


class RemovalReason(StrEnum):
    INVALID = "invalid"
    OUT_OF_RANGE = "out_of_range"
    EXPIRED = "expired"
    TEARDOWN = "teardown"


class NoticeKind(StrEnum):
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"
    ENABLED = "enabled"
    DISABLED = "disabled"


class AlertEvent(BaseModel):
    model_config = ConfigDict(frozen=True)


class MarkerCreated(AlertEvent):
    kind: Literal["marker_created"] = "marker_created"
    marker_id: int
    handle: VehicleHandle
    status: AlprStatus
    tier: SeverityTier


class MarkerRemoved(AlertEvent):
    kind: Literal["marker_removed"] = "marker_removed"
    marker_id: int
    handle: VehicleHandle
    reason: RemovalReason


class HitNotification(AlertEvent):
    kind: Literal["hit_notification"] = "hit_notification"
    handle: VehicleHandle
    plate: str
    alert: str
    hit_count: int = Field(..., ge=1)
    status: AlprStatus
    tier: SeverityTier
    play_sound: bool = True

    @property
    def message(self) -> str:
        return f"ALPR HIT\nVehicle: {self.plate}\nAlert: {self.alert}\nTotal hits: {self.hit_count}"


class StatusNotice(AlertEvent):
    kind: Literal["status_notice"] = "status_notice"
    notice: NoticeKind
    message: str


EventListener = Callable[[AlertEvent], None]


def discard(event: AlertEvent) -> None:
    """Default listener: drop the event."""


def publish(listener: EventListener, event: AlertEvent) -> None:
    """Deliver ``event``; listener failures are logged and never propagate."""
    try:
        listener(event)
    except Exception:
        _logger.warning("Event listener failed for %s", type(event).__name__, exc_info=True)
