"""Registry interfaces consumed by the lookup client."""

from __future__ import annotations

from typing import Any, Protocol


class Registry(Protocol):
    """Synchronous query interface onto the vehicle/owner store.

    Plate matching is exact on the normalized plate string.
    """

    def lookup_by_plate(self, plate: str) -> dict[str, Any]:
        """Flattened vehicle row joined with its owner's columns, or ``{}``."""
        ...

    def lookup_by_owner_name(self, first_name: str, last_name: str) -> list[dict[str, Any]]:
        ...


class AsyncRegistry(Protocol):
    """Awaitable twin of :class:`Registry`."""

    async def lookup_by_plate(self, plate: str) -> dict[str, Any]:
        ...

    async def lookup_by_owner_name(self, first_name: str, last_name: str) -> list[dict[str, Any]]:
        ...
