"""Normalization helpers.

Centralizes defensive parsing of registry rows and plate strings.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

from pyalpr._constants import NO_PLATE

_TRUE_STRINGS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_STRINGS = frozenset({"", "0", "false", "no", "n", "off"})


def clean_plate(plate: str | None) -> str:
    """Normalize a plate for exact matching: spaces stripped, uppercase."""
    if plate is None:
        return NO_PLATE
    return plate.replace(" ", "").upper().strip()


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def flag(value: Any) -> bool:
    """Interpret a registry flag column.

    ``None`` is unset. Numbers are set when non-zero, so a stray ``2`` in
    an ``is_stolen`` column still flags the vehicle. Strings accept the
    usual truthy/falsy spellings; anything else raises :class:`ValueError`.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"not a flag value: {value!r}")


def local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_date(value: Any) -> datetime | None:
    """Best-effort date parsing; unparseable values are treated as absent."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if not text:
        return None
    try:
        return local_naive(datetime.fromisoformat(text))
    except ValueError:
        pass
    for fmt in ("%m/%d/%Y", "%m/%d/%Y %H:%M:%S", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
