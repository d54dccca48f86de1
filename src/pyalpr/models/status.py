"""Status vocabulary: alert codes, classified status and severity tiers."""

from __future__ import annotations

from enum import StrEnum


class AlertCode(StrEnum):
    NO_REGISTRATION = "NO REG"
    EXPIRED_REGISTRATION = "REG EXP"
    NO_INSURANCE = "NO INS"
    EXPIRED_INSURANCE = "INS EXP"
    STOLEN = "STOLEN"
    WANTED = "WANTED"
    LICENSE_SUSPENDED = "LIC SUSP"
    LICENSE_REVOKED = "LIC REV"
    INCARCERATED = "JAILED"


class AlprStatus(StrEnum):
    """Single classified status of a scanned vehicle.

    The classifier only emits a subset of these; the remainder exist so
    severity and display maps stay total over the registry vocabulary.
    """

    CLEAN = "clean"
    NO_REGISTRATION = "no_registration"
    EXPIRED_REGISTRATION = "expired_registration"
    NO_INSURANCE = "no_insurance"
    EXPIRED_INSURANCE = "expired_insurance"
    STOLEN = "stolen"
    WANTED = "wanted"
    INCARCERATED = "incarcerated"
    SUSPENDED_LICENSE = "suspended_license"
    REVOKED_LICENSE = "revoked_license"
    MULTIPLE_HITS = "multiple_hits"


class LicenseStatus(StrEnum):
    VALID = "VALID"
    SUSPENDED = "SUSPENDED"
    REVOKED = "REVOKED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> LicenseStatus:
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return cls.UNKNOWN


class SeverityTier(StrEnum):
    """Coarse marker/notification priority bucket."""

    HIGH = "high"
    MEDIUM = "medium"
    MULTIPLE = "multiple"
    DEFAULT = "default"

    @property
    def color(self) -> str:
        return _TIER_COLORS[self]


class DisplayColor(StrEnum):
    LIGHT_GREEN = "light_green"
    YELLOW = "yellow"
    RED = "red"
    ORANGE = "orange"
    PURPLE = "purple"
    WHITE = "white"


_TIER_COLORS: dict[SeverityTier, str] = {
    SeverityTier.HIGH: "red",
    SeverityTier.MEDIUM: "yellow",
    SeverityTier.MULTIPLE: "orange",
    SeverityTier.DEFAULT: "white",
}

_SEVERITY: dict[AlprStatus, SeverityTier] = {
    AlprStatus.STOLEN: SeverityTier.HIGH,
    AlprStatus.WANTED: SeverityTier.HIGH,
    AlprStatus.SUSPENDED_LICENSE: SeverityTier.HIGH,
    AlprStatus.REVOKED_LICENSE: SeverityTier.HIGH,
    AlprStatus.EXPIRED_REGISTRATION: SeverityTier.MEDIUM,
    AlprStatus.NO_REGISTRATION: SeverityTier.MEDIUM,
    AlprStatus.EXPIRED_INSURANCE: SeverityTier.MEDIUM,
    AlprStatus.NO_INSURANCE: SeverityTier.MEDIUM,
    AlprStatus.MULTIPLE_HITS: SeverityTier.MULTIPLE,
}


def severity_tier(status: AlprStatus) -> SeverityTier:
    return _SEVERITY.get(status, SeverityTier.DEFAULT)
