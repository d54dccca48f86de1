"""Status resolution.

A registry record is run through an ordered set of independent rules,
each contributing at most one :class:`AlertCode`. The alert set is then
classified into a single :class:`AlprStatus` using a priority table.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from pyalpr.models.record import RegistryRecord
from pyalpr.models.result import ScanResult
from pyalpr.models.status import AlertCode, AlprStatus, LicenseStatus
from pyalpr.normalize import local_naive

Rule = Callable[[RegistryRecord, datetime], AlertCode | None]


def _registration(record: RegistryRecord, now: datetime) -> AlertCode | None:
    vehicle = record.vehicle
    if vehicle.no_registration:
        return AlertCode.NO_REGISTRATION
    if vehicle.registration_expiry is not None and vehicle.registration_expiry < now:
        return AlertCode.EXPIRED_REGISTRATION
    return None


def _insurance(record: RegistryRecord, now: datetime) -> AlertCode | None:
    vehicle = record.vehicle
    if vehicle.no_insurance:
        return AlertCode.NO_INSURANCE
    if vehicle.insurance_expiry is not None and vehicle.insurance_expiry < now:
        return AlertCode.EXPIRED_INSURANCE
    return None


def _stolen(record: RegistryRecord, now: datetime) -> AlertCode | None:
    return AlertCode.STOLEN if record.vehicle.is_stolen else None


def _owner_wanted(record: RegistryRecord, now: datetime) -> AlertCode | None:
    if record.owner is not None and record.owner.is_wanted:
        return AlertCode.WANTED
    return None


def _owner_license(record: RegistryRecord, now: datetime) -> AlertCode | None:
    if record.owner is None:
        return None
    if record.owner.license_status == LicenseStatus.SUSPENDED:
        return AlertCode.LICENSE_SUSPENDED
    if record.owner.license_status == LicenseStatus.REVOKED:
        return AlertCode.LICENSE_REVOKED
    return None


def _owner_incarcerated(record: RegistryRecord, now: datetime) -> AlertCode | None:
    if record.owner is not None and record.owner.is_incarcerated:
        return AlertCode.INCARCERATED
    return None


# Evaluation order is also the discovery order of the alert list.
RULES: tuple[Rule, ...] = (
    _registration,
    _insurance,
    _stolen,
    _owner_wanted,
    _owner_license,
    _owner_incarcerated,
)

# First match wins; more than one hit overrides to MULTIPLE_HITS.
STATUS_PRIORITY: tuple[tuple[frozenset[AlertCode], AlprStatus], ...] = (
    (frozenset({AlertCode.WANTED, AlertCode.STOLEN}), AlprStatus.STOLEN),
    (
        frozenset({AlertCode.LICENSE_SUSPENDED, AlertCode.LICENSE_REVOKED}),
        AlprStatus.SUSPENDED_LICENSE,
    ),
    (
        frozenset({AlertCode.EXPIRED_REGISTRATION, AlertCode.NO_REGISTRATION}),
        AlprStatus.EXPIRED_REGISTRATION,
    ),
    (
        frozenset({AlertCode.EXPIRED_INSURANCE, AlertCode.NO_INSURANCE}),
        AlprStatus.EXPIRED_INSURANCE,
    ),
    (frozenset({AlertCode.INCARCERATED}), AlprStatus.INCARCERATED),
)


def collect_alerts(record: RegistryRecord, now: datetime) -> list[AlertCode]:
    alerts: list[AlertCode] = []
    for rule in RULES:
        code = rule(record, now)
        if code is not None:
            alerts.append(code)
    return alerts


def classify(alerts: Sequence[AlertCode]) -> AlprStatus:
    """Map an alert list to a single status."""
    if not alerts:
        return AlprStatus.CLEAN
    if len(alerts) > 1:
        return AlprStatus.MULTIPLE_HITS
    raised = set(alerts)
    for codes, status in STATUS_PRIORITY:
        if raised & codes:
            return status
    raise ValueError(f"unclassified alerts: {list(alerts)}")


def summarize_alerts(alerts: Sequence[AlertCode], limit: int = 2) -> str:
    """First ``limit`` codes joined by spaces, plus ``+N`` for the remainder.

    >>> summarize_alerts([AlertCode.NO_REGISTRATION, AlertCode.STOLEN, AlertCode.WANTED])
    'NO REG STOLEN +1'
    """
    summary = " ".join(code.value for code in alerts[:limit])
    if len(alerts) > limit:
        summary += f" +{len(alerts) - limit}"
    return summary


@dataclass(frozen=True, slots=True)
class Resolution:
    alerts: tuple[AlertCode, ...]
    status: AlprStatus
    alert: str

    @property
    def hit_count(self) -> int:
        return len(self.alerts)

    def to_result(self, plate: str, distance: float) -> ScanResult:
        return ScanResult(
            plate=plate,
            distance=max(distance, 0.0),
            status=self.status,
            alerts=self.alerts,
            alert=self.alert,
            hit_count=self.hit_count,
        )


CLEAN = Resolution(alerts=(), status=AlprStatus.CLEAN, alert="")


def resolve(record: RegistryRecord | None, now: datetime | None = None) -> Resolution:
    """Resolve a registry record; a missing record is clean."""
    if record is None:
        return CLEAN
    # Record dates are naive local time.
    now = datetime.now() if now is None else local_naive(now)
    alerts = collect_alerts(record, now)
    return Resolution(alerts=tuple(alerts), status=classify(alerts), alert=summarize_alerts(alerts))
