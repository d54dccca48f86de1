"""Dict-backed registry for tests, demos and headless hosts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pyalpr.normalize import clean_plate


class InMemoryRegistry:
    """Keep vehicle rows by plate and owner rows in insertion order."""

    def __init__(
        self,
        vehicles: Iterable[Mapping[str, Any]] = (),
        owners: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        self._vehicles: dict[str, dict[str, Any]] = {}
        self._owners: list[dict[str, Any]] = []
        self.plate_queries = 0
        self.name_queries = 0
        for row in vehicles:
            self.add_vehicle(row)
        for row in owners:
            self.add_owner(row)

    def add_vehicle(self, row: Mapping[str, Any]) -> None:
        plate = clean_plate(row.get("license_plate") or row.get("plate"))
        self._vehicles[plate] = {**row, "license_plate": plate}

    def add_owner(self, row: Mapping[str, Any]) -> None:
        self._owners.append(dict(row))

    def lookup_by_plate(self, plate: str) -> dict[str, Any]:
        self.plate_queries += 1
        return dict(self._vehicles.get(plate, {}))

    def lookup_by_owner_name(self, first_name: str, last_name: str) -> list[dict[str, Any]]:
        self.name_queries += 1
        return [
            dict(row)
            for row in self._owners
            if (not first_name or row.get("first_name") == first_name)
            and (not last_name or row.get("last_name") == last_name)
        ]
