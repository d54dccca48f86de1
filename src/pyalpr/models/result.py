"""Scan result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pyalpr.models.status import AlertCode, AlprStatus


class ScanResult(BaseModel):
    """Outcome of scanning one vehicle.

    Parameters
    ----------
    plate : str
        Normalized plate string.
    distance : float
        Distance from the observer when the result was produced.
    status : AlprStatus
        Single classified status.
    alerts : tuple of AlertCode
        Every alert code raised, in discovery order.
    alert : str
        Short summary of ``alerts`` for display.
    hit_count : int
        Number of alerts raised.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    plate: str
    distance: float = Field(default=0.0, ge=0.0)
    status: AlprStatus = AlprStatus.CLEAN
    alerts: tuple[AlertCode, ...] = ()
    alert: str = ""
    hit_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_hit_invariants(self) -> ScanResult:
        if self.hit_count != len(self.alerts):
            raise ValueError(f"hit_count {self.hit_count} does not match {len(self.alerts)} alerts")
        if (self.status == AlprStatus.CLEAN) != (self.hit_count == 0):
            raise ValueError(f"status {self.status} is inconsistent with hit_count {self.hit_count}")
        return self

    @classmethod
    def clean(cls, plate: str, distance: float) -> ScanResult:
        return cls(plate=plate, distance=max(distance, 0.0))

    @property
    def is_hit(self) -> bool:
        return self.hit_count > 0

    def with_distance(self, distance: float) -> ScanResult:
        """Copy with a re-sampled distance; plate and status data are unchanged."""
        return self.model_copy(update={"distance": max(distance, 0.0)})
