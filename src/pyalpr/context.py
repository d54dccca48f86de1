"""Explicit mutable state of one scan loop."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pyalpr.models.result import ScanResult


class ScanState(StrEnum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass
class ScanContext:
    """Toggle, timer and cooldown state carried by a :class:`ScanLoop`."""

    enabled: bool = True
    state: ScanState = ScanState.INACTIVE
    last_toggle_at: float | None = None
    last_scan_at: float | None = None
    last_notification_at: float | None = None
    front: ScanResult | None = None
    rear: ScanResult | None = None

    def clear_results(self) -> None:
        self.front = None
        self.rear = None
