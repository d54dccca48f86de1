from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from pyalpr.models import AlertCode, AlprStatus, OwnerRecord, RegistryRecord, VehicleRecord
from pyalpr.resolver import STATUS_PRIORITY, classify, resolve, summarize_alerts

NOW = datetime(2026, 6, 1, 12, 0, 0)


def _record(owner: dict[str, Any] | None = None, **vehicle: Any) -> RegistryRecord:
    return RegistryRecord(
        vehicle=VehicleRecord.model_validate({"license_plate": "TEST1", **vehicle}),
        owner=OwnerRecord.model_validate(owner) if owner is not None else None,
    )


def test_missing_record_is_clean() -> None:
    resolution = resolve(None, NOW)

    assert resolution.status == AlprStatus.CLEAN
    assert resolution.hit_count == 0
    assert resolution.alert == ""


def test_valid_dates_are_clean() -> None:
    resolution = resolve(_record(registration_expiry="2030-01-01", insurance_expiry="2030-01-01"), NOW)
    assert resolution.status == AlprStatus.CLEAN


@pytest.mark.parametrize(
    ("fields", "owner", "code", "status"),
    [
        ({"no_registration": 1}, None, AlertCode.NO_REGISTRATION, AlprStatus.EXPIRED_REGISTRATION),
        ({"registration_expiry": "2026-05-31"}, None, AlertCode.EXPIRED_REGISTRATION, AlprStatus.EXPIRED_REGISTRATION),
        ({"no_insurance": 1}, None, AlertCode.NO_INSURANCE, AlprStatus.EXPIRED_INSURANCE),
        ({"insurance_expiry": "01/01/2020"}, None, AlertCode.EXPIRED_INSURANCE, AlprStatus.EXPIRED_INSURANCE),
        ({"is_stolen": 1}, None, AlertCode.STOLEN, AlprStatus.STOLEN),
        ({}, {"is_wanted": 1}, AlertCode.WANTED, AlprStatus.STOLEN),
        ({}, {"license_status": "Suspended"}, AlertCode.LICENSE_SUSPENDED, AlprStatus.SUSPENDED_LICENSE),
        ({}, {"license_status": "Revoked"}, AlertCode.LICENSE_REVOKED, AlprStatus.SUSPENDED_LICENSE),
        ({}, {"is_incarcerated": 1}, AlertCode.INCARCERATED, AlprStatus.INCARCERATED),
    ],
)
def test_single_rule_classification(
    fields: dict[str, Any],
    owner: dict[str, Any] | None,
    code: AlertCode,
    status: AlprStatus,
) -> None:
    resolution = resolve(_record(owner, **fields), NOW)

    assert resolution.alerts == (code,)
    assert resolution.hit_count == 1
    assert resolution.status == status
    assert resolution.alert == code.value


def test_no_registration_takes_precedence_over_expiry() -> None:
    resolution = resolve(_record(no_registration=1, registration_expiry="2000-01-01"), NOW)
    assert resolution.alerts == (AlertCode.NO_REGISTRATION,)


def test_multiple_hits_override_priority() -> None:
    resolution = resolve(
        _record({"is_wanted": 1, "license_status": "Revoked"}, no_insurance=1, is_stolen=1),
        NOW,
    )

    assert resolution.alerts == (
        AlertCode.NO_INSURANCE,
        AlertCode.STOLEN,
        AlertCode.WANTED,
        AlertCode.LICENSE_REVOKED,
    )
    assert resolution.status == AlprStatus.MULTIPLE_HITS
    assert resolution.alert == "NO INS STOLEN +2"


def test_owner_flags_ignored_without_owner() -> None:
    resolution = resolve(_record(first_name="Tony", last_name="Soprano"), NOW)
    assert resolution.status == AlprStatus.CLEAN


def test_summary_overflow_count() -> None:
    alerts = [AlertCode.NO_REGISTRATION, AlertCode.STOLEN, AlertCode.WANTED]
    assert summarize_alerts(alerts) == "NO REG STOLEN +1"
    assert summarize_alerts(alerts[:2]) == "NO REG STOLEN"
    assert summarize_alerts([]) == ""


def test_classify_priority_table_order() -> None:
    assert [status for _codes, status in STATUS_PRIORITY] == [
        AlprStatus.STOLEN,
        AlprStatus.SUSPENDED_LICENSE,
        AlprStatus.EXPIRED_REGISTRATION,
        AlprStatus.EXPIRED_INSURANCE,
        AlprStatus.INCARCERATED,
    ]
    assert classify([]) == AlprStatus.CLEAN
    assert classify([AlertCode.STOLEN, AlertCode.INCARCERATED]) == AlprStatus.MULTIPLE_HITS


def test_hit_invariants_hold_across_combinations() -> None:
    vehicle_flags = [{}, {"no_registration": 1}, {"no_insurance": 1}, {"is_stolen": 1}]
    owners: list[dict[str, Any] | None] = [None, {}, {"is_wanted": 1}, {"is_incarcerated": 1, "license_status": "Suspended"}]
    for fields in vehicle_flags:
        for owner in owners:
            resolution = resolve(_record(owner, **fields), NOW)
            result = resolution.to_result("TEST1", 3.0)

            assert result.hit_count == len(result.alerts)
            assert (result.status == AlprStatus.CLEAN) == (result.hit_count == 0)
            if result.hit_count > 1:
                assert result.status == AlprStatus.MULTIPLE_HITS


def test_aware_now_is_compared_in_local_time() -> None:
    record = _record(registration_expiry="2001-01-01", insurance_expiry="2030-01-01")
    resolution = resolve(record, datetime(2026, 6, 1, 12, 0, tzinfo=UTC))

    assert resolution.status == AlprStatus.EXPIRED_REGISTRATION
    assert resolution.alerts == (AlertCode.EXPIRED_REGISTRATION,)
