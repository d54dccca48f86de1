"""Lookup client: plate query plus owner resolution by name."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyalpr.exceptions import AlprLookupError
from pyalpr.models.record import OwnerRecord, RegistryRecord, VehicleRecord
from pyalpr.registry.base import AsyncRegistry, Registry

_logger = logging.getLogger(__name__)


def _build_vehicle(plate: str, row: dict[str, Any]) -> VehicleRecord:
    try:
        return VehicleRecord.model_validate(row)
    except ValidationError as exc:
        raise AlprLookupError(f"Malformed vehicle record for {plate}: {exc}", plate=plate) from exc


def _build_owner(plate: str, rows: list[dict[str, Any]]) -> OwnerRecord | None:
    if not rows:
        return None
    try:
        return OwnerRecord.model_validate(rows[0])
    except ValidationError as exc:
        raise AlprLookupError(f"Malformed owner record for {plate}: {exc}", plate=plate) from exc


class LookupClient:
    """Resolve a normalized plate into a :class:`RegistryRecord`.

    No caching happens here; the scan cache sits in front of this client.
    """

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    @property
    def registry(self) -> Registry:
        return self._registry

    def close(self) -> None:
        close = getattr(self._registry, "close", None)
        if close is not None:
            close()

    def fetch(self, plate: str) -> RegistryRecord | None:
        """Return the vehicle and its owner, or ``None`` for an unknown plate.

        Raises
        ------
        AlprLookupError
            If the registry fails or returns a malformed row.
        """
        row = self._registry.lookup_by_plate(plate)
        if not row:
            _logger.debug("No registry record for %s", plate)
            return None
        vehicle = _build_vehicle(plate, row)

        owner = None
        name = vehicle.owner_name
        if name is not None:
            owner = _build_owner(plate, self._registry.lookup_by_owner_name(*name))
        return RegistryRecord(vehicle=vehicle, owner=owner)


class AsyncLookupClient:
    """Awaitable twin of :class:`LookupClient`."""

    def __init__(self, registry: AsyncRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> AsyncRegistry:
        return self._registry

    async def fetch(self, plate: str) -> RegistryRecord | None:
        row = await self._registry.lookup_by_plate(plate)
        if not row:
            _logger.debug("No registry record for %s", plate)
            return None
        vehicle = _build_vehicle(plate, row)

        owner = None
        name = vehicle.owner_name
        if name is not None:
            owner = _build_owner(plate, await self._registry.lookup_by_owner_name(*name))
        return RegistryRecord(vehicle=vehicle, owner=owner)
