"""Read-only SQLite registry."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any

from pyalpr.exceptions import AlprConfigError, AlprRegistryError

_logger = logging.getLogger(__name__)

_REQUIRED_TABLES = frozenset({"vehicles", "peds"})

_PLATE_QUERY = """
    SELECT
        v.id,
        v.license_plate,
        v.vehicle_model,
        v.owner_type,
        v.owner_id,
        v.registration_expiry,
        v.insurance_expiry,
        v.is_stolen,
        v.no_registration,
        v.no_insurance,
        p.id AS ped_id,
        p.first_name,
        p.last_name,
        p.license_status,
        p.is_wanted,
        p.is_incarcerated
    FROM vehicles v
    LEFT JOIN peds p ON v.owner_type = 'person' AND v.owner_id = p.id
    WHERE v.license_plate = ? AND v.is_active = 1
"""

_NAME_QUERY = """
    SELECT
        p.id,
        p.first_name,
        p.last_name,
        p.license_status,
        p.is_wanted,
        p.is_incarcerated
    FROM peds p
    WHERE (? = '' OR p.first_name = ?) AND (? = '' OR p.last_name = ?)
    ORDER BY p.last_name, p.first_name
"""


class SqliteRegistry:
    """Query the ``vehicles`` and ``peds`` tables of a registry database.

    The database is opened read-only; creating or editing records is the
    job of whatever tool owns the file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        if not self._path.is_file():
            raise AlprConfigError(f"Registry database not found: {self._path}")
        try:
            self._conn = sqlite3.connect(f"{self._path.resolve().as_uri()}?mode=ro", uri=True)
            tables = {
                row[0] for row in self._conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }
        except sqlite3.Error as exc:
            raise AlprConfigError(f"Cannot open registry database {self._path}: {exc}") from exc
        missing = _REQUIRED_TABLES - tables
        if missing:
            self._conn.close()
            raise AlprConfigError(f"Registry database {self._path} lacks tables: {', '.join(sorted(missing))}")
        self._conn.row_factory = sqlite3.Row
        _logger.info("Opened registry database %s", self._path)

    def close(self) -> None:
        self._conn.close()
        _logger.info("Closed registry database %s", self._path)

    def __enter__(self) -> SqliteRegistry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def lookup_by_plate(self, plate: str) -> dict[str, Any]:
        try:
            row = self._conn.execute(_PLATE_QUERY, (plate,)).fetchone()
        except sqlite3.Error as exc:
            raise AlprRegistryError(f"Plate lookup failed: {exc}", plate=plate) from exc
        return dict(row) if row is not None else {}

    def lookup_by_owner_name(self, first_name: str, last_name: str) -> list[dict[str, Any]]:
        params = (first_name, first_name, last_name, last_name)
        try:
            rows = self._conn.execute(_NAME_QUERY, params).fetchall()
        except sqlite3.Error as exc:
            raise AlprRegistryError(f"Owner lookup failed for {first_name} {last_name}: {exc}") from exc
        return [dict(row) for row in rows]
