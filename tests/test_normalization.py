from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from pyalpr._constants import NO_PLATE
from pyalpr.normalize import clean_plate, flag, parse_date, safe_float, safe_int, safe_str


def test_clean_plate_strips_spaces_and_uppercases() -> None:
    assert clean_plate(" ab 12 cd ") == "AB12CD"


def test_clean_plate_missing_plate_uses_placeholder() -> None:
    assert clean_plate(None) == NO_PLATE


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, False),
        (True, True),
        (0, False),
        (1, True),
        (2, True),
        ("1", True),
        ("0", False),
        (" TRUE ", True),
        ("no", False),
        ("", False),
    ],
)
def test_flag_values(value: object, expected: bool) -> None:
    assert flag(value) is expected


def test_flag_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        flag("maybe")


def test_safe_numbers_and_strings() -> None:
    assert safe_float("--") is None
    assert safe_float("nan") is None
    assert safe_float("2.5") == 2.5
    assert safe_int("7") == 7
    assert safe_int(object()) is None
    assert safe_str("   ") is None
    assert safe_str(" Tony ") == "Tony"


def test_parse_date_accepts_iso_and_us_formats() -> None:
    assert parse_date("2026-12-01") == datetime(2026, 12, 1)
    assert parse_date("12/01/2026") == datetime(2026, 12, 1)
    assert parse_date("2026/12/01") == datetime(2026, 12, 1)
    assert parse_date(date(2026, 12, 1)) == datetime(2026, 12, 1)


def test_parse_date_unparseable_is_absent() -> None:
    assert parse_date("not a date") is None
    assert parse_date("") is None
    assert parse_date(None) is None


def test_parse_date_aware_values_become_naive_local() -> None:
    aware = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    parsed = parse_date(aware)

    assert parsed is not None
    assert parsed.tzinfo is None
    assert parsed == aware.astimezone().replace(tzinfo=None)
