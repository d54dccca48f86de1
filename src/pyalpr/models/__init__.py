"""Data models for registry records and scan results."""

from pyalpr.models.record import OwnerRecord, RegistryRecord, VehicleRecord
from pyalpr.models.result import ScanResult
from pyalpr.models.status import (
    AlertCode,
    AlprStatus,
    DisplayColor,
    LicenseStatus,
    SeverityTier,
    severity_tier,
)

__all__ = [
    "AlertCode",
    "AlprStatus",
    "DisplayColor",
    "LicenseStatus",
    "OwnerRecord",
    "RegistryRecord",
    "ScanResult",
    "SeverityTier",
    "VehicleRecord",
    "severity_tier",
]
