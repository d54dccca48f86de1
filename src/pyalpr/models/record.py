"""Registry record models.

Registries return flattened key/value rows. These models coerce the
columns the resolver consumes and keep the original row in ``raw``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from pyalpr.models.status import LicenseStatus
from pyalpr.normalize import flag, parse_date, safe_int, safe_str


class _RegistryRow(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", values)
        return merged


class VehicleRecord(_RegistryRow):
    """Vehicle half of a plate lookup, including the owner's name columns."""

    plate: str = Field(default="", validation_alias=AliasChoices("license_plate", "plate"))
    no_registration: bool = False
    registration_expiry: datetime | None = None
    no_insurance: bool = False
    insurance_expiry: datetime | None = None
    is_stolen: bool = False
    owner_type: str | None = None
    ped_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None

    @field_validator("no_registration", "no_insurance", "is_stolen", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> bool:
        return flag(value)

    @field_validator("registration_expiry", "insurance_expiry", mode="before")
    @classmethod
    def _coerce_dates(cls, value: Any) -> datetime | None:
        return parse_date(value)

    @field_validator("ped_id", mode="before")
    @classmethod
    def _coerce_ped_id(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("plate", mode="before")
    @classmethod
    def _coerce_plate(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("owner_type", "first_name", "last_name", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    @property
    def owner_name(self) -> tuple[str, str] | None:
        """``(first, last)`` when the owner can be resolved by name."""
        if self.ped_id is None or not self.first_name or not self.last_name:
            return None
        return self.first_name, self.last_name


class OwnerRecord(_RegistryRow):
    """Person record returned by a name lookup."""

    first_name: str | None = None
    last_name: str | None = None
    is_wanted: bool = False
    license_status: LicenseStatus = LicenseStatus.UNKNOWN
    is_incarcerated: bool = False

    @field_validator("is_wanted", "is_incarcerated", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> bool:
        return flag(value)

    @field_validator("license_status", mode="before")
    @classmethod
    def _coerce_license_status(cls, value: Any) -> LicenseStatus:
        text = safe_str(value)
        return LicenseStatus(text) if text is not None else LicenseStatus.UNKNOWN

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)


class RegistryRecord(BaseModel):
    """A vehicle record joined with its owner, when one was resolved."""

    model_config = ConfigDict(frozen=True)

    vehicle: VehicleRecord
    owner: OwnerRecord | None = None
